# src/veille_boamp/services/lots.py

from __future__ import annotations

from typing import Tuple

from veille_boamp.models.extracted import LotSummary
from veille_boamp.models.tree import NoticeTree
from veille_boamp.services.fields import first_match, resolve_amount, resolve_lot_duration
from veille_boamp.services.tree_access import as_list, child, first, unwrap_text


def extract_lot(lot: NoticeTree, index: int) -> LotSummary:
    """
    - index : position du lot (0-based), sert d'ID "Lot N" si le lot n'en a pas.
    """
    project = first(child(lot, "cac:ProcurementProject"))
    return LotSummary(
        id=unwrap_text(child(lot, "cbc:ID")) or f"Lot {index + 1}",
        name=first_match(as_list(child(project, "cbc:Name")), unwrap_text),
        amount=resolve_amount(project),
        duration=resolve_lot_duration(lot),
    )


def extract_lots(notice_root: NoticeTree) -> Tuple[LotSummary, ...]:
    # Ordre d'origine conservé, pas de dédoublonnage
    lots = as_list(child(notice_root, "cac:ProcurementProjectLot"))
    return tuple(extract_lot(lot, index) for index, lot in enumerate(lots))
