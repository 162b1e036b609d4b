# src/veille_boamp/models/extracted.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class MonetaryAmount:
    value: int
    currency: Optional[str] = None

    def __str__(self) -> str:
        formatted = f"{self.value:,}".replace(",", " ")
        return f"{formatted} {self.currency}" if self.currency else formatted


@dataclass(frozen=True)
class Duration:
    """
    Durée brute telle que publiée (ex: "12" + "MONTH").
    """

    value: str
    unit: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.value} {self.unit}" if self.unit else self.value


@dataclass(frozen=True)
class Location:
    """
    Lieu d'exécution : description libre et/ou adresse structurée.
    Les deux peuvent coexister.
    """

    description: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(frozen=True)
class Contact:
    name: Optional[str] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class PostalAddress:
    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country_code: Optional[str] = None


@dataclass(frozen=True)
class Buyer:
    """
    Acheteur retenu parmi les organisations listées dans l'avis.
    """

    name: Optional[str]
    identifier: Optional[str] = None
    contact: Optional[Contact] = None
    address: Optional[PostalAddress] = None
    website: Optional[str] = None


@dataclass(frozen=True)
class LotSummary:
    id: str
    name: Optional[str] = None
    amount: Optional[MonetaryAmount] = None
    duration: Optional[Duration] = None


@dataclass(frozen=True)
class ExtractedNotice:
    """
    Résumé typé d'un avis eForms.

    Valeur dérivée et immuable : on la recalcule à chaque fois que
    l'enregistrement source change. Tous les champs sont optionnels,
    un avis illisible donne un ExtractedNotice entièrement vide.
    """

    description: Optional[str] = None
    amount: Optional[MonetaryAmount] = None
    duration: Optional[Duration] = None
    location: Optional[Location] = None
    buyer: Optional[Buyer] = None
    website: Optional[str] = None
    lots: Tuple[LotSummary, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self == ExtractedNotice()
