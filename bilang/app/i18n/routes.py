"""
Static bidirectional table of posts published as one document per locale
"""
import json
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from ..exceptions import DictionaryError
from ..lang.state import Locale
from ..utils.logger import get_logger

logger = get_logger("i18n.routes")

DEFAULT_ROUTES_FILE = Path(__file__).parent / 'data' / 'routes.json'


class RouteMap:
    """Maps a dedicated document's path to its counterpart in the other locale"""

    def __init__(self, pairs: Iterable[Tuple[str, str]]):
        self._to_secondary: Dict[str, str] = {}
        self._to_primary: Dict[str, str] = {}

        for primary_path, secondary_path in pairs:
            if primary_path in self._to_secondary or primary_path in self._to_primary:
                raise DictionaryError(f"Duplicate route path: {primary_path}")
            if secondary_path in self._to_primary or secondary_path in self._to_secondary:
                raise DictionaryError(f"Duplicate route path: {secondary_path}")
            self._to_secondary[primary_path] = secondary_path
            self._to_primary[secondary_path] = primary_path

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "RouteMap":
        """Load the route table from a JSON file (the packaged one by default)"""
        routes_file = Path(path) if path else DEFAULT_ROUTES_FILE
        try:
            with open(routes_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DictionaryError(f"Cannot load route table {routes_file}: {e}") from e

        entries = data.get('routes', []) if isinstance(data, dict) else data
        pairs = []
        for entry in entries:
            if not (isinstance(entry, (list, tuple)) and len(entry) == 2
                    and all(isinstance(p, str) for p in entry)):
                raise DictionaryError(f"Malformed route entry in {routes_file}: {entry!r}")
            pairs.append((entry[0], entry[1]))

        route_map = cls(pairs)
        logger.info(f"Loaded {len(route_map)} routes from {routes_file.name}")
        return route_map

    @property
    def pairs(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(self._to_secondary.items())

    def translate(self, path: str, target: Locale) -> Optional[str]:
        """
        Find the path of the same document in the target locale

        Args:
            path: Path from either side of the table
            target: Locale whose side of the pair is wanted

        Returns:
            The target-side path, or None when the path is not in the table
        """
        if path in self._to_secondary:
            primary_path, secondary_path = path, self._to_secondary[path]
        elif path in self._to_primary:
            primary_path, secondary_path = self._to_primary[path], path
        else:
            return None

        return secondary_path if target is Locale.SECONDARY else primary_path

    def __contains__(self, path: str) -> bool:
        return path in self._to_secondary or path in self._to_primary

    def __len__(self) -> int:
        return len(self._to_secondary)
