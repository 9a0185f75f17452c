"""Repository demos: small pipelines exercising single tool wrappers.

Each demo takes the repository root as a `dagger.Directory` and reads its
fixture from the conventional path below it.
"""

from __future__ import annotations

import dagger

from athame.adapters.tools import (
    Alpine,
    AwsCli,
    Boilerplate,
    GolangciLint,
    Localstack,
    MkdocsMaterial,
    Terraform,
    TerraformDocs,
)
from athame.adapters.tools.aws_cli import LOCALSTACK_ENDPOINT

DEFAULT_TEMPLATE = "https://github.com/gruntwork-io/boilerplate.git#main:examples/for-learning-and-testing/terraform"
LOCALSTACK_ALIAS = "localstack"


async def terraform_plan(client: dagger.Client, source: dagger.Directory, path: str = "fixtures/terraform") -> str:
    tool = Terraform(client)
    return await tool.run(tool.plan(source.directory(path)))


def terraform_docs(client: dagger.Client, source: dagger.Directory, path: str = "fixtures/terraform") -> dagger.Directory:
    """Module directory with a generated README.md."""

    return TerraformDocs(client).markdown(source.directory(path))


def boilerplate(
    client: dagger.Client,
    template_src: str = DEFAULT_TEMPLATE,
    output_folder: str = "output",
    variables: dict[str, str] | None = None,
) -> dagger.Directory:
    """Render a git template (`url#ref:subpath`) into `output_folder`."""

    url, _, ref = template_src.partition("#")
    repo = client.git(url)
    if ref:
        branch, _, subpath = ref.partition(":")
        tree = repo.branch(branch).tree()
        template = tree.directory(subpath) if subpath else tree
    else:
        template = repo.head().tree()
    return Boilerplate(client).render(template, output_folder, variables or {"ServerName": "MyServer"})


async def golangci_lint_demo(
    client: dagger.Client,
    source: dagger.Directory,
    path: str = "fixtures/hello-world-cli",
) -> str:
    tool = GolangciLint(client)
    return await tool.run(tool.with_source(source.directory(path)).with_exec(["golangci-lint", "run"]))


def mkdocs_build_site(
    client: dagger.Client,
    source: dagger.Directory,
    site_path: str = "fixtures/mkdocs-material",
) -> dagger.Directory:
    return MkdocsMaterial(client).build(source.directory(site_path))


async def localstack_health(client: dagger.Client) -> str:
    """LocalStack's health endpoint, queried from a curl container."""

    service = Localstack(client).run_service()
    alpine = Alpine(client)
    return await alpine.run(
        alpine.with_packages(["curl"])
        .with_service_binding(LOCALSTACK_ALIAS, service)
        .with_exec(["curl", "-s", f"{LOCALSTACK_ENDPOINT}/_localstack/health"])
    )


async def localstack_create_bucket(client: dagger.Client, bucket_name: str = "demo-bucket") -> str:
    service = Localstack(client).run_service()
    aws = AwsCli(client)
    return await aws.run(
        aws.localstack()
        .with_service_binding(LOCALSTACK_ALIAS, service)
        .with_exec(["aws", "s3", "mb", f"s3://{bucket_name}"])
    )


async def localstack_terraform_apply(
    client: dagger.Client,
    source: dagger.Directory,
    workdir: str = "fixtures/terraform-localstack",
) -> str:
    """`tflocal init` and `tflocal apply` against a LocalStack service.

    S3_HOSTNAME makes tflocal use path-style S3 access through the binding.
    """

    service = Localstack(client).run_service()
    terraform = Terraform(client)
    return await terraform.run(
        terraform.terraform_local()
        .with_service_binding(LOCALSTACK_ALIAS, service)
        .with_env_variable("AWS_ENDPOINT_URL", LOCALSTACK_ENDPOINT)
        .with_env_variable("S3_HOSTNAME", LOCALSTACK_ALIAS)
        .with_mounted_directory("/work", source)
        .with_workdir(f"/work/{workdir}")
        .with_exec(["tflocal", "init"])
        .with_exec(["tflocal", "apply", "-auto-approve"])
    )
