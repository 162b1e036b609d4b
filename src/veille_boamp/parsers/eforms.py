# src/veille_boamp/parsers/eforms.py

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Union

from veille_boamp.models.tree import (
    ABSENT,
    MappingNode,
    NoticeTree,
    Scalar,
    SequenceNode,
    TextNode,
)
from veille_boamp.services.tree_access import child, is_absent

logger = logging.getLogger(__name__)

TEXT_KEY = "#text"
ATTRIBUTE_PREFIX = "@"

# Types d'avis eForms reconnus sous la clé "EFORMS", par ordre de priorité
NOTICE_ROOT_ELEMENTS = (
    "ContractNotice",
    "ContractAwardNotice",
    "PriorInformationNotice",
)


# ==========================
#   Construction de l'arbre
# ==========================

def _is_text_node(obj: Dict[str, Any]) -> bool:
    """
    {"#text": ..., "@attr": ...} -> noeud texte.
    Dès qu'il y a un autre élément enfant, on garde un mapping.
    """
    if TEXT_KEY not in obj:
        return False
    return all(k == TEXT_KEY or k.startswith(ATTRIBUTE_PREFIX) for k in obj)


def build_tree(obj: Any) -> NoticeTree:
    """
    Convertit un JSON décodé (dict / list / scalaire) en NoticeTree.
    """
    if obj is None:
        return ABSENT

    if isinstance(obj, (str, int, float, bool)):
        return Scalar(obj)

    if isinstance(obj, list):
        return SequenceNode(tuple(build_tree(item) for item in obj))

    if isinstance(obj, dict):
        if _is_text_node(obj):
            text = obj[TEXT_KEY]
            if text is None:
                return ABSENT
            attributes = {
                k[len(ATTRIBUTE_PREFIX):]: str(v)
                for k, v in obj.items()
                if k != TEXT_KEY and v is not None
            }
            return TextNode(text=text, attributes=attributes)
        return MappingNode({str(k): build_tree(v) for k, v in obj.items()})

    logger.debug("Type JSON inattendu ignoré dans l'avis: %s", type(obj).__name__)
    return ABSENT


def _build_or_absent(data: Any) -> NoticeTree:
    # Imbrication plus profonde que la pile Python
    try:
        return build_tree(data)
    except RecursionError:
        logger.warning("Avis trop profondément imbriqué, ignoré.")
        return ABSENT


def parse_notice_tree(raw: Union[str, bytes, Mapping[str, Any], None]) -> NoticeTree:
    """
    Parse le champ "donnees" d'un avis BOAMP.

    - raw : JSON sérialisé (str / bytes), ou dict déjà décodé
    Un JSON invalide ne lève pas d'exception : on log et on renvoie ABSENT,
    l'extraction produira alors un avis vide.
    """
    if raw is None:
        return ABSENT

    if isinstance(raw, Mapping):
        return _build_or_absent(dict(raw))

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Champ donnees non UTF-8, avis ignoré.")
            return ABSENT

    if not isinstance(raw, str):
        logger.warning("Champ donnees de type inattendu: %s", type(raw).__name__)
        return ABSENT

    if not raw.strip():
        return ABSENT

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.warning("Impossible de parser le JSON de l'avis: %s", exc)
        return ABSENT

    return _build_or_absent(data)


def find_notice_root(tree: NoticeTree) -> NoticeTree:
    """
    Renvoie l'élément racine de l'avis (ContractNotice, ...) sous "EFORMS".
    """
    eforms = child(tree, "EFORMS")
    for name in NOTICE_ROOT_ELEMENTS:
        root = child(eforms, name)
        if not is_absent(root):
            return root
    return ABSENT
