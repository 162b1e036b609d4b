from veille_boamp.services.text import decode_entities, markup_to_text


def test_double_encoded_markup_needs_two_passes():
    assert decode_entities("A &amp;lt;b&amp;gt; test") == "A <b> test"


def test_single_encoding():
    assert decode_entities("Lev&eacute;s &lt;b&gt;topo&lt;/b&gt;") == "Levés <b>topo</b>"


def test_never_more_than_two_passes():
    # triple encodage sur <i> : il en reste une couche après deux passages
    text = "&amp;lt;b&amp;gt; &amp;amp;lt;i&amp;amp;gt;"
    assert decode_entities(text) == "<b> &lt;i&gt;"


def test_second_pass_only_for_markup():
    # "&amp;amp;" -> "&amp;" : pas de &lt;/&gt; restant, un seul passage
    assert decode_entities("R&amp;amp;D") == "R&amp;D"


def test_empty_values():
    assert decode_entities(None) is None
    assert decode_entities("") == ""


def test_markup_to_text():
    assert markup_to_text("<p>Travaux de <strong>voirie</strong></p>\n<p>Lot 2</p>") == "Travaux de voirie Lot 2"
    assert markup_to_text("") is None
    assert markup_to_text("<br/>") is None
