# src/textubes/plugins/kinds/result.py
"""Destination kind."""

from textubes.plugins.base import DestinationKind


class Result(DestinationKind):
    """Displays the final output text of a flow."""

    name = "result"
    label = "Result"
