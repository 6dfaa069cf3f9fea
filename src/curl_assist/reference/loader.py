"""Flag documentation loader — reads the packaged flags.yaml once and serves lookups."""

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel

DOCS_PATH = Path(__file__).parent / "flags.yaml"


class FlagDoc(BaseModel):
    """Tooltip documentation for one flag pair."""

    name: str
    short: str | None = None
    long: str | None = None
    description: str
    example: str = ""
    usage: str = ""
    tip: str = ""


@lru_cache(maxsize=None)
def _load_docs() -> dict[str, FlagDoc]:
    entries = yaml.safe_load(DOCS_PATH.read_text(encoding="utf-8")) or []
    docs: dict[str, FlagDoc] = {}
    for entry in entries:
        doc = FlagDoc(**entry)
        for flag in (doc.short, doc.long):
            if flag:
                docs[flag] = doc
    return docs


def get_flag_doc(flag: str | None) -> FlagDoc | None:
    """Return the documentation for ``flag``, or None when it has no entry."""
    if not flag:
        return None
    return _load_docs().get(flag.strip())


def all_documented_flags() -> list[str]:
    """Return every flag spelling that has documentation, in file order."""
    return list(_load_docs())
