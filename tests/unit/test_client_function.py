"""Tests for ClientFunction and client source validation."""

import pytest

from lightrender import ClientFunction, RenderConfig, validate_source
from lightrender.runtime.exceptions import (
    ClientSourceError,
    ErrorCode,
    SourceDeniedError,
    SourceTooLargeError,
)


@pytest.fixture
def config() -> RenderConfig:
    return RenderConfig(max_computed_source=50, max_event_source=80)


class TestClientFunction:
    def test_of_string_detects_tokens(self) -> None:
        fn = ClientFunction.of("function(){ state['__STATE_ID__']++ }", "event")
        assert fn.kind == "event"
        assert fn.tokens == frozenset({"__STATE_ID__"})

    def test_of_strips_whitespace(self) -> None:
        assert ClientFunction.of("  s => s.x  \n", "computed").source == "s => s.x"

    def test_of_existing_instance_changes_kind(self) -> None:
        fn = ClientFunction("s => 1", kind="event")
        assert ClientFunction.of(fn, "computed").kind == "computed"

    def test_of_python_callable_is_rejected(self) -> None:
        with pytest.raises(ClientSourceError):
            ClientFunction.of(lambda state: state, "computed")  # type: ignore[arg-type]

    def test_unknown_kind_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            ClientFunction.of("x => x", "style")  # type: ignore[arg-type]

    def test_substitute_replaces_every_occurrence(self) -> None:
        fn = ClientFunction.of(
            "function(){ state['__STATE_ID__'] = state['__STATE_ID__'] + 1 }", "event"
        )
        replaced = fn.substitute({"__STATE_ID__": "id-abc"})
        assert "__STATE_ID__" not in replaced.source
        assert replaced.source.count("id-abc") == 2
        assert replaced.tokens == frozenset()

    def test_substitute_without_tokens_is_identity(self) -> None:
        fn = ClientFunction.of("() => 1", "event")
        assert fn.substitute({"__STATE_ID__": "x"}) == fn

    def test_str_is_source(self) -> None:
        assert str(ClientFunction.of("() => 1", "event")) == "() => 1"


class TestValidateSource:
    def test_valid_source_passes_through(self, config: RenderConfig) -> None:
        assert validate_source("s => s.a", "computed", config) == "s => s.a"

    def test_computed_limit(self, config: RenderConfig) -> None:
        with pytest.raises(SourceTooLargeError) as exc_info:
            validate_source("x" * 51, "computed", config)
        assert exc_info.value.limit == 50
        assert exc_info.value.code is ErrorCode.SOURCE_TOO_LARGE

    def test_event_limit_is_separate(self, config: RenderConfig) -> None:
        validate_source("x" * 70, "event", config)
        with pytest.raises(SourceTooLargeError):
            validate_source("x" * 81, "event", config)

    @pytest.mark.parametrize(
        "source",
        [
            "() => '</script><script>alert(1)'",
            "() => '</SCRIPT>'",
            "() => '<!-- hidden'",
        ],
    )
    def test_denied_sequences(self, source: str) -> None:
        with pytest.raises(SourceDeniedError):
            validate_source(source, "event", RenderConfig())

    def test_empty_source_is_rejected(self, config: RenderConfig) -> None:
        with pytest.raises(ClientSourceError):
            validate_source("", "event", config)

    def test_format_compact_includes_code(self, config: RenderConfig) -> None:
        with pytest.raises(SourceDeniedError) as exc_info:
            validate_source("'</script>'", "event", config)
        compact = exc_info.value.format_compact()
        assert compact.startswith("LR-SRC-002")
        assert "Docs:" in compact
