"""Pipeline services.

The CI pipelines (mkdocs-ci, go-ci, miele-ci) and the demo modules live
here, together with the fan-out/join and notification helpers they share.
"""
