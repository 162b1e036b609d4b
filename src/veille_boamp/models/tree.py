# src/veille_boamp/models/tree.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple, Union


# =======================
# Noeuds de l'arbre eForms
# =======================

@dataclass(frozen=True)
class Absent:
    """
    Noeud manquant (clé absente ou valeur JSON null).
    """

    def __bool__(self) -> bool:
        return False


ABSENT = Absent()


@dataclass(frozen=True)
class Scalar:
    value: Union[str, int, float, bool]


@dataclass(frozen=True)
class TextNode:
    """
    Élément XML avec attributs, rendu en JSON sous la forme :
        {"#text": "150000", "@currencyID": "EUR"}

    Les noms d'attributs sont stockés sans le préfixe "@".
    """

    text: Union[str, int, float, bool]
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MappingNode:
    children: Dict[str, "NoticeTree"] = field(default_factory=dict)


@dataclass(frozen=True)
class SequenceNode:
    items: Tuple["NoticeTree", ...] = ()


NoticeTree = Union[Absent, Scalar, TextNode, MappingNode, SequenceNode]
