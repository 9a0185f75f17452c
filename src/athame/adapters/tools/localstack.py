"""LocalStack: a local AWS cloud stack."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool

EDGE_PORT = 4566


class Localstack(ContainerTool):
    name = "localstack"
    image = "localstack/localstack"
    # renovate: datasource=docker depName=localstack/localstack
    default_tag = "4.10.0@sha256:a65ee2a9d45a7a34a1f1faae515d2e577ce11210312c077700ccc82daefec238"

    def run_service(self) -> dagger.Service:
        """LocalStack as a service listening on the edge port."""

        return self.base().with_exposed_port(EDGE_PORT).as_service(args=["docker-entrypoint.sh"])
