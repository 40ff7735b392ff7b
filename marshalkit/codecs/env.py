"""Environment snapshot codec."""

import os
from collections.abc import Mapping
from typing import Iterable, Optional


def read_environment(names: Iterable[str], environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Read one variable per name; unset variables are omitted.

    Args:
        names: Variable names to read
        environ: Environment mapping, os.environ when None

    Returns:
        Mapping of name to string value for the variables that are set
    """
    source = os.environ if environ is None else environ
    return {name: source[name] for name in names if name in source}
