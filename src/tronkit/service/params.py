"""
The ParamReader class - resolves request parameters from query string first, then form body
"""
from typing import Mapping, Optional

__all__ = ["ParamReader"]


class ParamReader:
    """
    Lookup order for get("key", "privateKey"):
        query["key"], query["privateKey"], form["key"], form["privateKey"]

    Names are case-sensitive and an empty string counts as absent.
    """

    def __init__(self, query: Optional[Mapping] = None, form: Optional[Mapping] = None):
        self.query = dict(query or {})
        self.form = dict(form or {})

    def get(self, primary: str, *aliases: str, default: Optional[str] = None) -> Optional[str]:
        names = (primary, *aliases)
        for source in (self.query, self.form):
            for name in names:
                value = source.get(name)
                if value is None:
                    continue
                value = str(value).strip()
                if value != "":
                    return value
        return default

    def get_int(self, primary: str, *aliases: str, default: int = 0) -> int:
        """Absent or unparsable values fall back to `default`"""
        value = self.get(primary, *aliases)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def __repr__(self):
        return f"ParamReader(query={sorted(self.query)}, form={sorted(self.form)})"
