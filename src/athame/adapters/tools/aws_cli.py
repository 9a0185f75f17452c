"""AWS CLI, with a preset for LocalStack."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool

LOCALSTACK_ENDPOINT = "http://localstack:4566"


class AwsCli(ContainerTool):
    name = "aws-cli"
    image = "amazon/aws-cli"
    # renovate: datasource=docker depName=amazon/aws-cli
    default_tag = "2.31.26@sha256:cf1851fa3162c35009b2dc6d2df2797e5b0e9723fe546f545c9fa34a3dc03477"

    def localstack(self) -> dagger.Container:
        """Container configured with LocalStack's test credentials.

        The caller binds the LocalStack service under the `localstack` alias.
        """

        return (
            self.base()
            .with_env_variable("AWS_ACCESS_KEY_ID", "test")
            .with_env_variable("AWS_SECRET_ACCESS_KEY", "test")
            .with_env_variable("AWS_DEFAULT_REGION", "us-east-1")
            .with_env_variable("AWS_ENDPOINT_URL", LOCALSTACK_ENDPOINT)
        )
