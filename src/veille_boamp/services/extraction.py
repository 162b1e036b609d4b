# src/veille_boamp/services/extraction.py

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from veille_boamp.models.extracted import ExtractedNotice
from veille_boamp.models.notice import BoampRecord
from veille_boamp.models.tree import NoticeTree
from veille_boamp.parsers.eforms import find_notice_root, parse_notice_tree
from veille_boamp.services.buyer import (
    DEFAULT_BUYER_SELECTION,
    BuyerSelectionConfig,
    build_buyer,
    resolve_buyer,
)
from veille_boamp.services.fields import (
    first_present,
    resolve_amount,
    resolve_description,
    resolve_document_uri,
    resolve_duration,
    resolve_location,
)
from veille_boamp.services.lots import extract_lots
from veille_boamp.services.text import markup_to_text
from veille_boamp.services.tree_access import child, first, is_absent

logger = logging.getLogger(__name__)


# =========================
# Extraction
# =========================


def extract_from_tree(
    tree: NoticeTree,
    config: BuyerSelectionConfig = DEFAULT_BUYER_SELECTION,
) -> ExtractedNotice:
    """
    Extrait le résumé typé d'un arbre eForms déjà parsé.

    Acheteur, champs et lots sont résolus indépendamment sur le même arbre,
    sans le modifier.
    """
    root = find_notice_root(tree)
    if is_absent(root):
        return ExtractedNotice()

    candidate = resolve_buyer(root, config=config)
    buyer = build_buyer(candidate, root) if candidate is not None else None

    return ExtractedNotice(
        description=resolve_description(root),
        amount=resolve_amount(first(child(root, "cac:ProcurementProject"))),
        duration=resolve_duration(root),
        location=resolve_location(root),
        buyer=buyer,
        website=first_present(
            lambda: buyer.website if buyer is not None else None,
            lambda: resolve_document_uri(root),
        ),
        lots=extract_lots(root),
    )


def extract_notice(
    donnees: Union[str, bytes, Mapping[str, Any], None],
    config: BuyerSelectionConfig = DEFAULT_BUYER_SELECTION,
) -> ExtractedNotice:
    """
    Point d'entrée : champ "donnees" brut -> ExtractedNotice.

    Ne lève jamais d'exception sur un avis mal formé : on obtient
    simplement un résultat vide.
    """
    return extract_from_tree(parse_notice_tree(donnees), config)


def extract_record(record: BoampRecord) -> ExtractedNotice:
    extracted = extract_notice(record.donnees)
    if extracted.is_empty:
        logger.debug("Avis %s : aucune donnée eForms exploitable.", record.record_id)
    return extracted


# =========================
# Résumé à plat (export JSON)
# =========================


def summarize_record(record: BoampRecord, extracted: Optional[ExtractedNotice] = None) -> Dict[str, Any]:
    """
    Fusionne l'enveloppe BOAMP et l'extraction eForms dans un dict
    sérialisable. Le nom de l'acheteur retombe sur "nom_acheteur"
    si aucune organisation n'a pu être résolue.
    """
    if extracted is None:
        extracted = extract_record(record)

    buyer_name = extracted.buyer.name if extracted.buyer and extracted.buyer.name else record.buyer_name
    location = extracted.location

    return {
        "idweb": record.record_id,
        "title": record.title,
        "publication_date": record.publication_date,
        "deadline": record.application_deadline,
        "departments": record.departments,
        "market_type": record.market_type,
        "family": record.family,
        "procedure": record.procedure,
        "descriptors": record.descriptors,
        "url": record.url,
        "buyer_name": buyer_name,
        "description": markup_to_text(extracted.description),
        "amount": extracted.amount.value if extracted.amount else None,
        "currency": extracted.amount.currency if extracted.amount else None,
        "amount_display": str(extracted.amount) if extracted.amount else None,
        "duration": str(extracted.duration) if extracted.duration else None,
        "city": location.city if location else None,
        "postal_code": location.postal_code if location else None,
        "website": extracted.website,
        "lots_count": len(extracted.lots),
        "extracted": asdict(extracted),
    }


def summarize_all(records: Iterable[BoampRecord]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    empty = 0

    for record in records:
        extracted = extract_record(record)
        if extracted.is_empty:
            empty += 1
        rows.append(summarize_record(record, extracted))

    logger.info(
        "Extraction terminée : %d avis (%d sans données eForms exploitables)",
        len(rows),
        empty,
    )
    return rows
