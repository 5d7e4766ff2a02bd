from backend.app.i18n.translations import (
    DEFAULT_LANGUAGE,
    TRANSLATION_MISSING,
    TRANSLATIONS,
    Language,
    parse_language,
    translate,
)


def test_parse_language_is_case_insensitive():
    assert parse_language("EN") is Language.ENGLISH
    assert parse_language(" de ") is Language.GERMAN


def test_parse_language_falls_back_to_german():
    assert DEFAULT_LANGUAGE is Language.GERMAN
    assert parse_language(None) is Language.GERMAN
    assert parse_language("") is Language.GERMAN
    assert parse_language("fr") is Language.GERMAN


def test_translate_known_keys():
    assert translate(Language.ENGLISH, "invoice", "invoice") == "INVOICE"
    assert translate(Language.GERMAN, "invoice", "invoice") == "RECHNUNG"
    assert translate(Language.ENGLISH, "invoice", "due_date") == "Due date"


def test_translate_missing_key_returns_sentinel(caplog):
    with caplog.at_level("WARNING"):
        assert translate(Language.ENGLISH, "invoice", "nope") == TRANSLATION_MISSING
        assert translate(Language.GERMAN, "reports", "invoice") == TRANSLATION_MISSING
    assert "Translation missing" in caplog.text


def test_languages_share_the_same_invoice_keys():
    english = set(TRANSLATIONS[Language.ENGLISH]["invoice"])
    german = set(TRANSLATIONS[Language.GERMAN]["invoice"])
    assert english == german
    assert {"invoice", "date", "due_date", "total_amount", "payment_details", "no_payment_details"} <= english
