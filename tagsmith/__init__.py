"Tag proposals from free-form track titles."

from importlib import metadata

from .proposal import TagProposal
from .title_parser import parse_title

__all__ = ["TagProposal", "parse_title", "__version__"]


def __getattr__(name: str) -> str:
    if name != "__version__":
        raise AttributeError(name)
    try:
        return metadata.version("tagsmith")
    except metadata.PackageNotFoundError:  # pragma: no cover - source checkout without install
        return "0.0.0"
