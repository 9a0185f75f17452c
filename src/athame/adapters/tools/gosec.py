"""securego/gosec: Go security checker."""

from __future__ import annotations

import dagger

from athame.adapters.tools.base import ContainerTool


class Gosec(ContainerTool):
    name = "gosec"
    image = "securego/gosec"
    # renovate: datasource=docker depName=securego/gosec
    default_tag = "2.22.10@sha256:c8852d609f9af551387555a81808a3bca8d172629b124fab0d83c937cabc2f3d"

    def check(self, source: dagger.Directory, target: str = "./...") -> dagger.Container:
        return self.with_source(source).with_exec(["gosec", target])
