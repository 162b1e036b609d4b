# src/veille_boamp/persistence/json_store.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from veille_boamp.models.notice import BoampRecord

logger = logging.getLogger(__name__)


def load_records(path: Path) -> List[BoampRecord]:
    """
    Charge un export BOAMP en liste de BoampRecord.

    Formats acceptés :
    - une liste d'enregistrements
    - une réponse brute de l'API : {"records": [...]} (v1) ou {"results": [...]} (v2.1)
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        logger.error("Erreur lors de la lecture du fichier JSON %s: %s", path, exc)
        raise
    except json.JSONDecodeError as exc:
        raise ValueError(f"JSON invalide dans {path}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("records") or data.get("results") or []

    if not isinstance(data, list):
        raise ValueError(f"Format d'export BOAMP inattendu dans {path}")

    return [BoampRecord.from_record(item) for item in data if isinstance(item, dict)]


def save_rows_to_json(path: Path, rows: Iterable[Dict[str, Any]]) -> None:
    """
    Sauvegarde une liste de dicts (avis résumés) dans un fichier JSON.
    """
    rows_list: List[Dict[str, Any]] = list(rows)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows_list, f, ensure_ascii=False, indent=2)
    except OSError as exc:
        logger.error("Erreur lors de l'écriture du fichier JSON %s: %s", path, exc)
        raise
