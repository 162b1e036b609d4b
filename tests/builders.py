"""Constructeurs d'avis eForms (forme xmltodict) pour les tests."""

from typing import Any, Dict, List, Optional


def organization(name: Any, org_id: Optional[str] = None, **company: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"cac:PartyName": {"cbc:Name": name}}
    if org_id is not None:
        body["cac:PartyIdentification"] = {"cbc:ID": {"#text": org_id, "@schemeName": "organization"}}
    body.update(company)
    return {"efac:Company": body}


def wrap_notice(contract_notice: Dict[str, Any]) -> Dict[str, Any]:
    return {"EFORMS": {"ContractNotice": contract_notice}}


def with_extension_organizations(orgs: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "ext:UBLExtensions": {
            "ext:UBLExtension": {
                "ext:ExtensionContent": {
                    "efext:EformsExtension": {
                        "efac:Organizations": {"efac:Organization": orgs},
                    }
                }
            }
        }
    }
