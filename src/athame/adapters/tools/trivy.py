"""Trivy: vulnerability scanning of image references and Dagger containers."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool

DEFAULT_SEVERITY = "UNKNOWN,LOW,MEDIUM,HIGH,CRITICAL"


class Trivy(ContainerTool):
    name = "trivy"
    image = "aquasec/trivy"
    # renovate: datasource=docker depName=aquasec/trivy
    default_tag = "0.67.2@sha256:e2b22eac59c02003d8749f5b8d9bd073b62e30fefaef5b7c8371204e0a4b0c08"

    def base(self) -> dagger.Container:
        # Keep the vulnerability DB across runs.
        return (
            self._client.container()
            .from_(self.image_ref)
            .with_mounted_cache("/root/.cache/trivy", self._client.cache_volume("trivy-db-cache"))
        )

    @staticmethod
    def _scan_args(severity: str, exit_code: int, fmt: str) -> list[str]:
        return [
            "trivy",
            "image",
            "--quiet",
            "--severity",
            severity,
            "--exit-code",
            str(exit_code),
            "--format",
            fmt,
        ]

    async def scan_image(
        self,
        image_ref: str,
        severity: str = DEFAULT_SEVERITY,
        exit_code: int = 0,
        fmt: str = "table",
    ) -> str:
        """Scan a remote image reference."""

        return await self.run(self.base().with_exec([*self._scan_args(severity, exit_code, fmt), image_ref]))

    async def scan_container(
        self,
        container: dagger.Container,
        image_ref: str,
        severity: str = DEFAULT_SEVERITY,
        exit_code: int = 0,
        fmt: str = "table",
    ) -> str:
        """Scan a Dagger container through its OCI tarball."""

        tarball = f"/scan/{image_ref}"
        return await self.run(
            self.base()
            .with_mounted_file(tarball, container.as_tarball())
            .with_exec([*self._scan_args(severity, exit_code, fmt), "--input", tarball])
        )
