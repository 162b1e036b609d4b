import json
from typing import Any, Dict

import pytest

from builders import organization, with_extension_organizations, wrap_notice


@pytest.fixture
def contract_notice() -> Dict[str, Any]:
    """Avis eForms réaliste, tel que publié sur BOAMP (forme xmltodict)."""
    notice = with_extension_organizations(
        [
            organization("AWS - Avenue-Web Systèmes", "ORG-0003"),
            organization(
                "Commune de Cergy",
                "ORG-0001",
                **{
                    "cac:Contact": {
                        "cbc:Name": "Service commande publique",
                        "cbc:Telephone": "+33 1 34 33 44 00",
                        "cbc:ElectronicMail": "marches@cergy.fr",
                    },
                    "cac:PostalAddress": {
                        "cbc:StreetName": "3 place de l'Hôtel de Ville",
                        "cbc:CityName": "Cergy",
                        "cbc:PostalZone": "95000",
                        "cac:Country": {"cbc:IdentificationCode": {"#text": "FRA", "@listName": "country"}},
                    },
                },
            ),
            organization("Tribunal administratif de Cergy-Pontoise", "ORG-0002"),
        ]
    )
    notice.update(
        {
            "cac:ContractingParty": {
                "cac:Party": {"cac:PartyIdentification": {"cbc:ID": {"#text": "ORG-0001", "@schemeName": "organization"}}}
            },
            "cac:ProcurementProject": {
                "cbc:Name": {"#text": "Levés topographiques", "@languageID": "FRA"},
                "cbc:Description": {"#text": "Relevés &amp;lt;b&amp;gt;topographiques&amp;lt;/b&amp;gt;", "@languageID": "FRA"},
                "cac:RequestedTenderTotal": {
                    "cbc:EstimatedOverallContractAmount": {"#text": "200000", "@currencyID": "EUR"},
                },
                "cac:RealizedLocation": {
                    "cbc:Description": {"#text": "Territoire communal", "@languageID": "FRA"},
                    "cac:Address": {
                        "cbc:CityName": "Cergy",
                        "cbc:PostalZone": "95000",
                        "cac:Country": {"cbc:IdentificationCode": {"#text": "FRA", "@listName": "country"}},
                    },
                },
            },
            "cac:ProcurementProjectLot": [
                {
                    "cbc:ID": {"#text": "LOT-0001", "@schemeName": "Lot"},
                    "cac:ProcurementProject": {
                        "cbc:Name": {"#text": "Topographie", "@languageID": "FRA"},
                        "cac:RequestedTenderTotal": {
                            "cbc:EstimatedOverallContractAmount": {"#text": "120000", "@currencyID": "EUR"},
                        },
                        "cac:PlannedPeriod": {"cbc:DurationMeasure": {"#text": "12", "@unitCode": "MONTH"}},
                    },
                    "cac:TenderingTerms": {
                        "cac:CallForTendersDocumentReference": [
                            {"cbc:ID": "DCE-1"},
                            {
                                "cbc:ID": "DCE-2",
                                "cac:Attachment": {
                                    "cac:ExternalReference": {"cbc:URI": "https://www.marches-publics.info/dce/1234"}
                                },
                            },
                        ]
                    },
                },
                {
                    "cbc:ID": {"#text": "LOT-0002", "@schemeName": "Lot"},
                    "cac:ProcurementProject": {
                        "cbc:Name": {"#text": "Bornage", "@languageID": "FRA"},
                        "cac:RequestedTenderTotal": {
                            "cbc:EstimatedOverallContractAmount": {"#text": "80000", "@currencyID": "EUR"},
                        },
                        "cac:PlannedPeriod": {"cbc:DurationMeasure": {"#text": "24", "@unitCode": "MONTH"}},
                    },
                },
            ],
        }
    )
    return notice


@pytest.fixture
def donnees(contract_notice) -> str:
    return json.dumps(wrap_notice(contract_notice), ensure_ascii=False)


@pytest.fixture
def boamp_record(donnees) -> Dict[str, Any]:
    """Enregistrement API Explore v2.1 (à plat)."""
    return {
        "idweb": "25-123456",
        "objet": "Prestations de géomètre-expert",
        "dateparution": "2025-11-19",
        "datelimitereponse": "2025-12-15T12:00:00+01:00",
        "code_departement": ["95"],
        "nom_acheteur": "VILLE DE CERGY",
        "type_marche": "SERVICES",
        "famille_libelle": "Marchés publics",
        "procedure_categorise": "OUVERT",
        "descripteur_libelle": ["Géomètre", "Topographie"],
        "url_avis": "https://www.boamp.fr/avis/detail/25-123456",
        "donnees": donnees,
    }
