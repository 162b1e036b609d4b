# src/veille_boamp/services/buyer.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from veille_boamp.models.extracted import Buyer, Contact, PostalAddress
from veille_boamp.models.tree import NoticeTree
from veille_boamp.services.fields import first_match, resolve_website
from veille_boamp.services.tree_access import (
    as_list,
    child,
    first,
    is_absent,
    path,
    unwrap_text,
)

logger = logging.getLogger(__name__)

# Plateforme de publication (Avenue-Web Systèmes / AWS) : jamais l'acheteur réel
PLATFORM_OPERATOR_MARKERS: Tuple[str, ...] = ("avenue-web", "aws")

# Tribunaux souvent listés comme organisation secondaire (instance de recours)
TRIBUNAL_MARKER = "tribunal"

ORGANIZATION_PATH = ("efac:Organizations", "efac:Organization")
EXTENSION_ORGANIZATION_PATH = (
    "ext:ExtensionContent",
    "efext:EformsExtension",
    "efac:Organizations",
    "efac:Organization",
)


@dataclass(frozen=True)
class BuyerSelectionConfig:
    """
    Marqueurs (sous-chaînes, insensibles à la casse) utilisés pour écarter
    ou déprioriser des organisations.
    """

    excluded_markers: Tuple[str, ...] = PLATFORM_OPERATOR_MARKERS
    deprioritized_marker: str = TRIBUNAL_MARKER


DEFAULT_BUYER_SELECTION = BuyerSelectionConfig()


# ==========================
#   Organisation candidate
# ==========================

@dataclass(frozen=True)
class OrganizationCandidate:
    """
    Vue en lecture seule sur un efac:Organization de l'avis.
    """

    node: NoticeTree

    @property
    def company(self) -> NoticeTree:
        return first(child(self.node, "efac:Company"))

    @property
    def name(self) -> Optional[str]:
        # Nom unique ou une entrée par langue : première renseignée
        names = child(first(child(self.company, "cac:PartyName")), "cbc:Name")
        return first_match(as_list(names), unwrap_text)

    @property
    def identifier(self) -> Optional[str]:
        return unwrap_text(path(first(child(self.company, "cac:PartyIdentification")), "cbc:ID"))

    @property
    def contact(self) -> Optional[Contact]:
        node = first(child(self.company, "cac:Contact"))
        if is_absent(node):
            return None
        return Contact(
            name=unwrap_text(child(node, "cbc:Name")),
            telephone=unwrap_text(child(node, "cbc:Telephone")),
            email=unwrap_text(child(node, "cbc:ElectronicMail")),
            website=unwrap_text(child(node, "cbc:WebsiteURI")),
        )

    @property
    def address(self) -> Optional[PostalAddress]:
        node = first(child(self.company, "cac:PostalAddress"))
        if is_absent(node):
            return None
        return PostalAddress(
            street=unwrap_text(child(node, "cbc:StreetName")),
            city=unwrap_text(child(node, "cbc:CityName")),
            postal_code=unwrap_text(child(node, "cbc:PostalZone")),
            country_code=unwrap_text(path(node, "cac:Country", "cbc:IdentificationCode")),
        )

    def name_contains(self, marker: str) -> bool:
        return marker.lower() in (self.name or "").lower()


# ==========================
#   Localisation des organisations
# ==========================

def find_organizations(notice_root: NoticeTree) -> List[OrganizationCandidate]:
    """
    Liste des organisations : chemin direct, sinon dans la première
    extension UBL (cas le plus courant sur BOAMP).
    """
    nodes = as_list(path(notice_root, *ORGANIZATION_PATH))
    if not nodes:
        extension = first(path(notice_root, "ext:UBLExtensions", "ext:UBLExtension"))
        nodes = as_list(path(extension, *EXTENSION_ORGANIZATION_PATH))
    return [OrganizationCandidate(node) for node in nodes]


def contracting_party_id(notice_root: NoticeTree) -> Optional[str]:
    party = first(child(notice_root, "cac:ContractingParty"))
    identification = first(path(party, "cac:Party", "cac:PartyIdentification"))
    return unwrap_text(child(identification, "cbc:ID"))


# ==========================
#   Étapes de sélection
# ==========================

def exclude_platform_operators(
    candidates: List[OrganizationCandidate],
    markers: Tuple[str, ...] = PLATFORM_OPERATOR_MARKERS,
) -> List[OrganizationCandidate]:
    return [c for c in candidates if not any(c.name_contains(m) for m in markers)]


def prefer_non_tribunals(
    candidates: List[OrganizationCandidate],
    marker: str = TRIBUNAL_MARKER,
) -> List[OrganizationCandidate]:
    """
    Écarte les tribunaux s'il reste au moins une autre organisation.
    Ne s'applique que s'il y a plusieurs candidats.
    """
    if len(candidates) <= 1:
        return candidates
    others = [c for c in candidates if not c.name_contains(marker)]
    return others or candidates


def match_identifier(
    candidates: List[OrganizationCandidate],
    target_id: Optional[str],
) -> Optional[OrganizationCandidate]:
    if target_id is None:
        return None
    for candidate in candidates:
        if candidate.identifier == target_id:
            return candidate
    return None


def select_buyer(
    organizations: List[OrganizationCandidate],
    target_id: Optional[str],
    config: BuyerSelectionConfig = DEFAULT_BUYER_SELECTION,
) -> Optional[OrganizationCandidate]:
    """
    Choisit l'acheteur réel parmi les organisations de l'avis :

    1) on retire la plateforme de publication (AWS / Avenue-Web),
    2) on dépriorise les tribunaux s'il reste d'autres organisations,
    3) on prend l'organisation dont l'ID correspond au pouvoir adjudicateur,
    4) sinon la première restante,
    5) si tout a été filtré, la première de la liste d'origine.
    """
    if not organizations:
        return None

    candidates = exclude_platform_operators(organizations, config.excluded_markers)
    candidates = prefer_non_tribunals(candidates, config.deprioritized_marker)

    if not candidates:
        logger.debug(
            "Toutes les organisations ont été filtrées, repli sur la première (%s).",
            organizations[0].name,
        )
        return organizations[0]

    match = match_identifier(candidates, target_id)
    if match is not None:
        return match
    return candidates[0]


def resolve_buyer(
    notice_root: NoticeTree,
    target_id: Optional[str] = None,
    config: BuyerSelectionConfig = DEFAULT_BUYER_SELECTION,
) -> Optional[OrganizationCandidate]:
    """
    - target_id : ID du pouvoir adjudicateur (cac:ContractingParty),
      lu dans l'avis s'il n'est pas fourni.
    """
    if target_id is None:
        target_id = contracting_party_id(notice_root)
    return select_buyer(find_organizations(notice_root), target_id, config)


def build_buyer(candidate: OrganizationCandidate, notice_root: NoticeTree) -> Buyer:
    return Buyer(
        name=candidate.name,
        identifier=candidate.identifier,
        contact=candidate.contact,
        address=candidate.address,
        website=resolve_website(candidate.company, notice_root),
    )
