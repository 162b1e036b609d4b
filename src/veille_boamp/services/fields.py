# src/veille_boamp/services/fields.py

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Optional, TypeVar

from veille_boamp.models.extracted import Duration, Location, MonetaryAmount
from veille_boamp.models.tree import ABSENT, NoticeTree
from veille_boamp.services.text import decode_entities
from veille_boamp.services.tree_access import (
    as_list,
    attribute,
    child,
    first,
    is_absent,
    path,
    unwrap_text,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Même comportement que parseInt : partie entière en tête de chaîne
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


# ==========================
#   Chaînes de repli
# ==========================

def first_present(*attempts: Callable[[], Optional[T]]) -> Optional[T]:
    """
    Évalue les tentatives dans l'ordre et s'arrête à la première
    qui renvoie autre chose que None.
    """
    for attempt in attempts:
        result = attempt()
        if result is not None:
            return result
    return None


def first_match(candidates: Iterable[NoticeTree], read: Callable[[NoticeTree], Optional[T]]) -> Optional[T]:
    for node in candidates:
        result = read(node)
        if result is not None:
            return result
    return None


def parse_amount(text: Optional[str]) -> Optional[int]:
    """
    "150000" -> 150000, "150000.50" -> 150000, "n/c" -> None.
    """
    if text is None:
        return None
    m = _LEADING_INT_RE.match(text)
    if not m:
        logger.debug("Montant illisible ignoré: %r", text)
        return None
    return int(m.group(1))


# ==========================
#   Montant / devise
# ==========================

def _framework_maximum_amount(requested_total: NoticeTree) -> NoticeTree:
    extension = first(path(requested_total, "ext:UBLExtensions", "ext:UBLExtension"))
    return path(
        extension,
        "ext:ExtensionContent",
        "efext:EformsExtension",
        "efbc:FrameworkMaximumAmount",
    )


def _amount_node(requested_total: NoticeTree) -> NoticeTree:
    """
    Montant maximum de l'accord-cadre (extension eForms) en priorité,
    sinon le montant total estimé.
    """
    def present(node: NoticeTree) -> Optional[NoticeTree]:
        return node if unwrap_text(node) is not None else None

    node = first_present(
        lambda: present(_framework_maximum_amount(requested_total)),
        lambda: present(child(requested_total, "cbc:EstimatedOverallContractAmount")),
    )
    return node if node is not None else ABSENT


def resolve_amount(procurement_project: NoticeTree) -> Optional[MonetaryAmount]:
    """
    Montant (entier) + devise d'un cac:ProcurementProject (avis ou lot).

    Un montant présent mais illisible est considéré absent.
    """
    requested_total = first(child(procurement_project, "cac:RequestedTenderTotal"))
    node = _amount_node(requested_total)

    value = parse_amount(unwrap_text(node))
    if value is None:
        return None
    return MonetaryAmount(value=value, currency=attribute(node, "currencyID"))


# ==========================
#   Durée
# ==========================

def _duration_of(procurement_project: NoticeTree) -> Optional[Duration]:
    measure = path(first(child(procurement_project, "cac:PlannedPeriod")), "cbc:DurationMeasure")
    value = unwrap_text(measure)
    if value is None:
        return None
    return Duration(value=value, unit=attribute(measure, "unitCode"))


def resolve_lot_duration(lot: NoticeTree) -> Optional[Duration]:
    return _duration_of(first(child(lot, "cac:ProcurementProject")))


def resolve_duration(notice_root: NoticeTree) -> Optional[Duration]:
    """
    Durée de l'avis, sinon celle du premier lot.
    """
    project = first(child(notice_root, "cac:ProcurementProject"))
    first_lot = first(child(notice_root, "cac:ProcurementProjectLot"))
    return first_present(
        lambda: _duration_of(project),
        lambda: resolve_lot_duration(first_lot),
    )


# ==========================
#   Description / lieu
# ==========================

def resolve_description(notice_root: NoticeTree) -> Optional[str]:
    project = first(child(notice_root, "cac:ProcurementProject"))
    # Une seule description, ou une par langue : on prend la première renseignée
    text = first_match(as_list(child(project, "cbc:Description")), unwrap_text)
    return decode_entities(text)


def resolve_location(notice_root: NoticeTree) -> Optional[Location]:
    project = first(child(notice_root, "cac:ProcurementProject"))
    realized = first(child(project, "cac:RealizedLocation"))
    if is_absent(realized):
        return None

    address = first(child(realized, "cac:Address"))
    location = Location(
        description=first_match(as_list(child(realized, "cbc:Description")), unwrap_text),
        city=unwrap_text(child(address, "cbc:CityName")),
        postal_code=unwrap_text(child(address, "cbc:PostalZone")),
        country_code=unwrap_text(path(address, "cac:Country", "cbc:IdentificationCode")),
    )
    if location == Location():
        return None
    return location


# ==========================
#   Site web
# ==========================

def _external_reference_uri(reference: NoticeTree) -> Optional[str]:
    return unwrap_text(path(reference, "cac:Attachment", "cac:ExternalReference", "cbc:URI"))


def resolve_document_uri(notice_root: NoticeTree) -> Optional[str]:
    """
    Première URI de DCE trouvée dans les cac:CallForTendersDocumentReference
    des lots.
    """
    references = [
        reference
        for lot in as_list(child(notice_root, "cac:ProcurementProjectLot"))
        for reference in as_list(path(lot, "cac:TenderingTerms", "cac:CallForTendersDocumentReference"))
    ]
    return first_match(references, _external_reference_uri)


def resolve_website(company: NoticeTree, notice_root: NoticeTree) -> Optional[str]:
    """
    Site de l'organisation, puis celui de son contact, puis lien vers
    les documents de la consultation.
    """
    return first_present(
        lambda: unwrap_text(child(company, "cbc:WebsiteURI")),
        lambda: unwrap_text(child(first(child(company, "cac:Contact")), "cbc:WebsiteURI")),
        lambda: resolve_document_uri(notice_root),
    )
