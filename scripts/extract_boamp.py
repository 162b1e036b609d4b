# scripts/extract_boamp.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

from veille_boamp.persistence.json_store import load_records, save_rows_to_json
from veille_boamp.persistence.paths import (
    ensure_data_dirs,
    extracted_boamp_path,
    raw_boamp_path,
)
from veille_boamp.services.extraction import summarize_all

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger("extract_boamp")


def main() -> None:
    ensure_data_dirs()

    # Fichier du jour par défaut, ou chemin passé en argument
    input_path = Path(sys.argv[1]) if len(sys.argv) > 1 else raw_boamp_path()
    output_path = extracted_boamp_path()

    if not input_path.exists():
        logger.error("Fichier BOAMP introuvable : %s", input_path)
        return

    try:
        records = load_records(input_path)
    except (OSError, ValueError) as exc:
        logger.error("Impossible de charger les avis BOAMP: %s", exc)
        return

    logger.info("Avis BOAMP chargés : %d", len(records))

    rows = summarize_all(records)

    with_amount = sum(1 for r in rows if r["amount"] is not None)
    with_lots = sum(1 for r in rows if r["lots_count"])
    logger.info("Avis avec montant : %d", with_amount)
    logger.info("Avis allotis      : %d", with_lots)

    try:
        save_rows_to_json(output_path, rows)
    except OSError:
        return

    logger.info("JSON extrait écrit dans: %s", output_path)
    logger.info("Terminé ✓")


if __name__ == "__main__":
    main()
