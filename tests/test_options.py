import pytest

from lsp_adapter.coordinator import AdapterOptions


def test_defaults() -> None:
    options = AdapterOptions.fill_defaults(None)

    assert options.enable_hover_info
    assert options.enable_diagnostics
    assert options.enable_signatures
    assert options.enable_gutter_marks
    assert options.enable_context_menu
    assert options.suggest
    assert options.debounce_suggestions_while_typing == 200
    assert options.quick_suggestions_delay == 200
    assert options.diagnostic_mark_class_name == "lsp-diagnostic"
    assert options.context_menu_provider is None


def test_fill_defaults_accepts_camel_case_keys() -> None:
    options = AdapterOptions.fill_defaults(
        {"enableHoverInfo": False, "quickSuggestionsDelay": 50, "suggest": False}
    )

    assert not options.enable_hover_info
    assert options.quick_suggestions_delay == 50
    assert not options.suggest
    assert options.enable_diagnostics


def test_fill_defaults_passes_instances_through() -> None:
    options = AdapterOptions(enable_signatures=False)

    assert AdapterOptions.fill_defaults(options) is options


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ValueError):
        AdapterOptions.fill_defaults({"enableTelepathy": True})


@pytest.mark.parametrize("value", [-1, 1.5, True])
def test_debounce_must_be_non_negative_int(value: object) -> None:
    with pytest.raises(ValueError):
        AdapterOptions.fill_defaults({"debounceSuggestionsWhileTyping": value})


def test_provider_must_be_callable() -> None:
    with pytest.raises(TypeError):
        AdapterOptions(context_menu_provider="menu")  # type: ignore[arg-type]


def test_merged_returns_updated_copy() -> None:
    options = AdapterOptions()

    updated = options.merged(enableDiagnostics=False, diagnostic_mark_class_name="x")

    assert options.enable_diagnostics
    assert not updated.enable_diagnostics
    assert updated.diagnostic_mark_class_name == "x"
