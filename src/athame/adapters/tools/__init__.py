"""Containerized tool wrappers.

Each wrapper pins one image and exposes a handful of commands. Nothing here
knows about pipelines or notifications.
"""

from athame.adapters.tools.alpine import Alpine
from athame.adapters.tools.apprise import Apprise
from athame.adapters.tools.archlinux import Archlinux
from athame.adapters.tools.asdf import Asdf
from athame.adapters.tools.aws_cli import AwsCli
from athame.adapters.tools.base import ContainerTool
from athame.adapters.tools.boilerplate import Boilerplate
from athame.adapters.tools.crane import Crane
from athame.adapters.tools.flyio import Flyio
from athame.adapters.tools.gcloud import Gcloud
from athame.adapters.tools.github_cli import GithubCli
from athame.adapters.tools.golangci_lint import GolangciLint
from athame.adapters.tools.gosec import Gosec
from athame.adapters.tools.httpie import Httpie
from athame.adapters.tools.localstack import Localstack
from athame.adapters.tools.lychee import Lychee
from athame.adapters.tools.markdownlint import MarkdownlintCli2
from athame.adapters.tools.mermaid import MermaidCli
from athame.adapters.tools.mise import Mise
from athame.adapters.tools.mkdocs_material import MkdocsMaterial
from athame.adapters.tools.node import Node
from athame.adapters.tools.ok import Ok
from athame.adapters.tools.oras import Oras
from athame.adapters.tools.prettier import Prettier
from athame.adapters.tools.release_please import ReleasePlease
from athame.adapters.tools.renovate import Renovate
from athame.adapters.tools.terraform import Terraform
from athame.adapters.tools.terraform_docs import TerraformDocs
from athame.adapters.tools.trivy import Trivy
from athame.adapters.tools.uv import Uv
from athame.adapters.tools.vale import Vale

__all__ = [
    "Alpine",
    "Apprise",
    "Archlinux",
    "Asdf",
    "AwsCli",
    "Boilerplate",
    "ContainerTool",
    "Crane",
    "Flyio",
    "Gcloud",
    "GithubCli",
    "GolangciLint",
    "Gosec",
    "Httpie",
    "Localstack",
    "Lychee",
    "MarkdownlintCli2",
    "MermaidCli",
    "Mise",
    "MkdocsMaterial",
    "Node",
    "Ok",
    "Oras",
    "Prettier",
    "ReleasePlease",
    "Renovate",
    "Terraform",
    "TerraformDocs",
    "Trivy",
    "Uv",
    "Vale",
]
