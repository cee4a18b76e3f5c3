"""JSON artifacts written between pipeline stages."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, List, Optional

from monosyllabize.core import CandidatePool, Dictionary, MonosyllabicTable, SonorityGraph
from monosyllabize.core.parameters import GraphParameters
from monosyllabize.errors import ArtifactError
from monosyllabize.utils.observability import get_logger

SYLLABIFIED_FILE = "syllabified_ipa.json"
GRAPH_FILE = "sonority_graph.json"
GRAPH_DOT_FILE = "sonority_graph.dot"
CANDIDATES_FILE = "random_generated_syllables_with_variations.json"
MONOSYLLABIC_FILE = "monosyllabic.json"
DUPLICATES_FILE = "duplicates.json"
REPORT_FILE = "report.json"


def _ensure_parent_directory(path: Path) -> None:
    directory = path.parent
    if not directory.exists():
        os.makedirs(directory, exist_ok=True)


class ArtifactStore:
    """Reads and writes the cached corpus, graph, pool and final outputs."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self._logger = get_logger(__name__).bind(component="artifact_store", root=str(self.root))

    def path(self, name: str) -> Path:
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path(name).exists()

    def read_json(self, name: str) -> Any:
        path = self.path(name)
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError as exc:
            raise ArtifactError(f"artifact not found: {path}") from exc
        except (OSError, ValueError) as exc:
            raise ArtifactError(f"artifact unreadable: {path} ({exc})") from exc

    def write_json(self, name: str, payload: Any, *, indent: Optional[int] = 2) -> Path:
        path = self.path(name)
        _ensure_parent_directory(path)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=indent)
        self._logger.debug("Artifact written", context={"path": str(path)})
        return path

    def write_text(self, name: str, text: str) -> Path:
        path = self.path(name)
        _ensure_parent_directory(path)
        path.write_text(text, encoding="utf-8")
        return path

    # Typed artifacts -------------------------------------------------------
    def load_dictionary(self) -> Dictionary:
        rows = self.read_json(SYLLABIFIED_FILE)
        try:
            return Dictionary.from_rows(rows)
        except (IndexError, TypeError, ValueError) as exc:
            raise ArtifactError(f"malformed syllabified corpus: {exc}") from exc

    def save_dictionary(self, dictionary: Dictionary) -> Path:
        return self.write_json(SYLLABIFIED_FILE, dictionary.to_rows(), indent=None)

    def load_graph(self, params: Optional[GraphParameters] = None) -> SonorityGraph:
        payload = self.read_json(GRAPH_FILE)
        if not isinstance(payload, dict):
            raise ArtifactError("sonority graph artifact is not an object")
        return SonorityGraph.from_dict(payload, params=params)

    def save_graph(self, graph: SonorityGraph) -> Path:
        self.write_text(GRAPH_DOT_FILE, graph.to_dot())
        return self.write_json(GRAPH_FILE, graph.to_dict(), indent=None)

    def load_pool(self) -> CandidatePool:
        return CandidatePool.from_rows(self.read_json(CANDIDATES_FILE))

    def save_pool(self, pool: CandidatePool) -> Path:
        return self.write_json(CANDIDATES_FILE, pool.to_rows(), indent=None)

    def save_table(self, table: MonosyllabicTable) -> Path:
        return self.write_json(MONOSYLLABIC_FILE, table.to_rows())

    def load_table(self) -> MonosyllabicTable:
        rows = self.read_json(MONOSYLLABIC_FILE)
        try:
            return MonosyllabicTable.from_rows(rows)
        except (TypeError, ValueError) as exc:
            raise ArtifactError(f"malformed monosyllabic table: {exc}") from exc

    def save_duplicates(self, duplicates: List[tuple]) -> Path:
        return self.write_json(DUPLICATES_FILE, [list(pair) for pair in duplicates])


__all__ = [
    "ArtifactStore",
    "SYLLABIFIED_FILE",
    "GRAPH_FILE",
    "GRAPH_DOT_FILE",
    "CANDIDATES_FILE",
    "MONOSYLLABIC_FILE",
    "DUPLICATES_FILE",
    "REPORT_FILE",
]
