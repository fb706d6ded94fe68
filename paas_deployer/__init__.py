"""Deploys a source-control commit to a PaaS environment."""

__version__ = "0.1.0"
