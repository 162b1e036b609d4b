# src/veille_boamp/services/text.py

from __future__ import annotations

import html
from typing import Optional

from bs4 import BeautifulSoup

ENCODED_MARKUP_MARKERS = ("&lt;", "&gt;")


def decode_entities(text: Optional[str]) -> Optional[str]:
    """
    Décode les entités HTML d'un texte libre (description d'avis).

    Certains avis BOAMP sont encodés deux fois :
        "A &amp;lt;b&amp;gt; test" -> "A &lt;b&gt; test" -> "A <b> test"

    Si après un premier passage il reste des "&lt;" / "&gt;", on fait un
    second passage, jamais plus.
    """
    if not text:
        return text

    decoded = html.unescape(text)
    if any(marker in decoded for marker in ENCODED_MARKUP_MARKERS):
        decoded = html.unescape(decoded)
    return decoded


def markup_to_text(markup: Optional[str]) -> Optional[str]:
    """
    Version texte brut d'une description déjà décodée (pour logs / exports).
    """
    if not markup:
        return None

    soup = BeautifulSoup(markup, "html.parser")
    text = soup.get_text(" ", strip=True)
    return " ".join(text.split()) or None
