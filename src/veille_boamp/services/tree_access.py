# src/veille_boamp/services/tree_access.py

from __future__ import annotations

from typing import List, Optional

from veille_boamp.models.tree import (
    ABSENT,
    Absent,
    MappingNode,
    NoticeTree,
    Scalar,
    SequenceNode,
    TextNode,
)

# Seul module autorisé à tester la forme d'un noeud (scalaire, texte,
# mapping, liste). Tout le reste du code passe par ces primitives.


def is_absent(node: NoticeTree) -> bool:
    return isinstance(node, Absent)


def unwrap_text(node: NoticeTree) -> Optional[str]:
    """
    Scalaire -> sa valeur, noeud texte -> son "#text", sinon None.

    Une chaîne vide (ou uniquement des espaces) est considérée absente.
    """
    if isinstance(node, Scalar):
        value = node.value
    elif isinstance(node, TextNode):
        value = node.text
    else:
        return None

    text = str(value)
    if not text.strip():
        return None
    return text


def as_list(node: NoticeTree) -> List[NoticeTree]:
    """
    Absent -> [], liste -> ses éléments (ordre conservé), sinon [node].
    """
    if isinstance(node, Absent):
        return []
    if isinstance(node, SequenceNode):
        return list(node.items)
    return [node]


def first(node: NoticeTree) -> NoticeTree:
    items = as_list(node)
    return items[0] if items else ABSENT


def child(node: NoticeTree, key: str) -> NoticeTree:
    if isinstance(node, MappingNode):
        return node.children.get(key, ABSENT)
    return ABSENT


def path(node: NoticeTree, *keys: str) -> NoticeTree:
    """
    Descend une suite d'éléments ; le premier maillon manquant donne ABSENT.
    """
    for key in keys:
        node = child(node, key)
        if isinstance(node, Absent):
            break
    return node


def attribute(node: NoticeTree, name: str) -> Optional[str]:
    # currencyID, unitCode, ... ne sont portés que par les noeuds texte
    if isinstance(node, TextNode):
        value = node.attributes.get(name)
        if value is not None and value.strip():
            return value
    return None
