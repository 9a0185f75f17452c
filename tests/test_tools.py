from __future__ import annotations

import pytest

from athame.adapters import engine
from athame.adapters.tools import (
    Apprise,
    AwsCli,
    Crane,
    GithubCli,
    Lychee,
    MarkdownlintCli2,
    MkdocsMaterial,
    Prettier,
    ReleasePlease,
    Renovate,
    Terraform,
    Trivy,
    Uv,
    Vale,
)
from athame.core.errors import CredentialError, ToolError
from tests.fakes import FakeClient, FakeDirectory, FakeEngineError, FakeSecret


@pytest.mark.unit
def test_images_are_pinned_by_digest(fake_client):
    for tool_cls in (Vale, Prettier, MarkdownlintCli2, Lychee, MkdocsMaterial, Trivy, Crane, Terraform, Uv):
        tool = tool_cls(fake_client)
        assert "@sha256:" in tool.image_ref, tool_cls.__name__
        assert tool.image_ref.startswith(f"{tool_cls.image}:")


@pytest.mark.unit
def test_image_tag_override(fake_client):
    assert Vale(fake_client, image_tag="v3.0.0").image_ref == "jdkato/vale:v3.0.0"


@pytest.mark.unit
def test_check_mounts_source_and_runs_command(fake_client):
    source = FakeDirectory("/site")
    ctr = Vale(fake_client).check(source, "docs")

    assert ctr.ops_named("without_entrypoint")
    assert ("mount", "/src", source) in ctr.ops
    assert ("workdir", "/src") in ctr.ops
    assert ctr.execs == [["vale", "docs"]]


@pytest.mark.unit
def test_prettier_installs_then_checks(fake_client):
    ctr = Prettier(fake_client).check(FakeDirectory(), "docs/**/*.md")
    assert ctr.execs == [["npm", "install", "-g", "prettier"], ["prettier", "--check", "docs/**/*.md"]]


@pytest.mark.unit
def test_mkdocs_build_returns_site(fake_client):
    site = MkdocsMaterial(fake_client).build(FakeDirectory("/repo/site"))
    assert site.path == "/docs/site"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_run_returns_stdout():
    client = FakeClient(outputs={"markdownlint-cli2": "Summary: 0 error(s)\n"})
    tool = MarkdownlintCli2(client)
    assert await tool.run(tool.check(FakeDirectory(), "**/*.md")) == "Summary: 0 error(s)\n"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_run_maps_exec_failure_to_tool_error():
    client = FakeClient(fail_on=("lychee",))
    tool = Lychee(client)
    with pytest.raises(ToolError) as info:
        await tool.run(tool.check(FakeDirectory(), "docs"))
    err = info.value
    assert err.tool == "lychee"
    assert err.exit_code == 1
    assert err.command == ["lychee", "--no-progress", "docs"]
    assert err.stdout == "partial output\n"
    assert err.stderr == "lychee failed\n"
    assert str(err) == "lychee exited with code 1: lychee failed"


class _BrokenContainer:
    async def stdout(self) -> str:
        raise FakeEngineError("connection to engine lost")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_run_maps_engine_failure_to_tool_error():
    with pytest.raises(ToolError) as info:
        await engine.stdout(_BrokenContainer(), tool="lychee")
    assert info.value.exit_code is None
    assert info.value.command == []
    assert str(info.value) == "lychee: connection to engine lost"


@pytest.mark.unit
def test_secrets_never_reach_argument_lists(fake_client):
    token = FakeSecret("token", "ghp_very_secret")
    containers = [
        Apprise(fake_client).send("title", "body", FakeSecret("url", "discord://hook")),
        ReleasePlease(fake_client, FakeDirectory()).manifest(token, "https://github.com/o/r"),
        GithubCli(fake_client).with_token(token),
    ]
    for ctr in containers:
        for args in ctr.execs:
            assert "ghp_very_secret" not in " ".join(args)
            assert "discord://hook" not in " ".join(args)
        assert ctr.ops_named("secret_env")


@pytest.mark.unit
def test_aws_cli_localstack_preset(fake_client):
    env = AwsCli(fake_client).localstack().env
    assert env["AWS_ENDPOINT_URL"] == "http://localstack:4566"
    assert env["AWS_DEFAULT_REGION"] == "us-east-1"


@pytest.mark.unit
def test_terraform_plan(fake_client):
    ctr = Terraform(fake_client).plan(FakeDirectory())
    assert ctr.execs == [["terraform", "init"], ["terraform", "plan"]]


@pytest.mark.unit
def test_uv_tool_install_with_version(fake_client):
    assert Uv(fake_client).tool_install("ruff", "==0.5.0").execs == [["uv", "tool", "install", "ruff==0.5.0"]]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_trivy_scans_container_tarball():
    client = FakeClient()
    target = client.container().from_("nginx:latest")
    await Trivy(client).scan_container(target, "scan-target", severity="HIGH,CRITICAL", exit_code=1)

    ctr = client.evaluated[0]
    assert ctr.ops_named("cache")
    (_, path, _), = ctr.ops_named("mount_file")
    assert path == "/scan/scan-target"
    args = ctr.execs[-1]
    assert args[:2] == ["trivy", "image"]
    assert args[-2:] == ["--input", "/scan/scan-target"]
    assert args[args.index("--exit-code") + 1] == "1"
    assert args[args.index("--severity") + 1] == "HIGH,CRITICAL"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_crane_digest():
    client = FakeClient(outputs={"crane digest": "sha256:abc\n"})
    assert await Crane(client).digest("alpine:latest") == "sha256:abc\n"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_renovate_environment():
    client = FakeClient()
    await Renovate(client).run_on("owner/repo", FakeSecret("t", "x"))
    ctr = client.evaluated[0]
    assert ctr.env["RENOVATE_PLATFORM"] == "github"
    assert ctr.env["RENOVATE_REQUIRE_CONFIG"] == "optional"
    assert ctr.execs == [["renovate", "owner/repo"]]


@pytest.mark.unit
def test_secret_from(fake_client):
    assert engine.secret_from(fake_client, "x", None) is None
    assert engine.secret_from(fake_client, "x", "") is None
    assert engine.secret_from(fake_client, "x", "value").name == "x"
    with pytest.raises(CredentialError):
        engine.secret_from(fake_client, "ghcr-token", None, required=True)
