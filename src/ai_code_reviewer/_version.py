"""Version information for AI Code Reviewer."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "ai-code-reviewer"


def get_package_version() -> str:
    """
    Get the installed version, falling back to pyproject.toml.

    Returns:
        Version string

    Raises:
        RuntimeError: If version cannot be determined
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with pyproject_path.open("rb") as f:
                data = tomllib.load(f)
            return str(data["project"]["version"])

        raise RuntimeError("Could not determine package version") from None


__version__ = get_package_version()

__all__ = ["__version__"]
