# src/veille_boamp/models/notice.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union


# =======================
# BOAMP
# =======================

def _as_str_list(value: Any) -> List[str]:
    # descripteur_libelle / code_departement : tantôt une chaîne, tantôt une liste
    if value is None:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None]
    return [str(value)]


@dataclass
class BoampRecord:
    """
    Enveloppe d'un avis BOAMP tel que renvoyé par l'API Opendatasoft.

    Le champ "donnees" contient l'avis eForms complet, sérialisé en JSON.
    """

    record_id: str
    title: Optional[str]
    publication_date: Optional[str]
    # Date limite de réponse brute renvoyée par l'API
    application_deadline: Optional[str]
    buyer_name: Optional[str]
    departments: List[str]
    market_type: Optional[str]
    family: Optional[str]
    procedure: Optional[str]
    descriptors: List[str]
    url: Optional[str]

    # Avis eForms sérialisé (str) ou déjà décodé (dict) selon l'export
    donnees: Union[str, Dict[str, Any], None] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "BoampRecord":
        """
        Accepte les deux formats de l'API :
        - v1 "records/1.0/search" : {"recordid": ..., "fields": {...}}
        - v2.1 "explore" : enregistrement à plat
        """
        fields = record.get("fields")
        if not isinstance(fields, dict):
            fields = record

        record_id = fields.get("idweb") or fields.get("id") or record.get("recordid") or ""

        return cls(
            record_id=str(record_id),
            title=fields.get("objet") or fields.get("intitule") or None,
            publication_date=fields.get("dateparution"),
            application_deadline=fields.get("datelimitereponse"),
            buyer_name=fields.get("nom_acheteur") or fields.get("nomacheteur"),
            departments=_as_str_list(fields.get("code_departement")),
            market_type=fields.get("type_marche"),
            family=fields.get("famille_libelle"),
            procedure=fields.get("procedure_categorise"),
            descriptors=_as_str_list(fields.get("descripteur_libelle")),
            url=fields.get("url_avis") or fields.get("lien") or fields.get("url"),
            donnees=fields.get("donnees"),
        )
