"""Tests for the counter example."""


class TestCounterApp:
    """Verify the counter page carries its hydration script."""

    def test_markup(self, example_app) -> None:
        assert '<span id="count"></span>' in example_app.output
        assert '<button id="inc" class="btn">+1</button>' in example_app.output

    def test_named_class_in_head(self, example_app) -> None:
        assert ".btn{padding:4px 12px;margin-left:4px;}" in example_app.output

    def test_state_restored(self, example_app) -> None:
        assert 'raw["count"]=0;' in example_app.output

    def test_placeholder_substituted(self, example_app) -> None:
        assert "__STATE_ID__" not in example_app.output
        assert "state['count'] += 1;" in example_app.output
        assert "state['count'] = 0;" in example_app.output

    def test_binding_and_computed(self, example_app) -> None:
        assert 'watch("count",u);' in example_app.output
        assert "(s => 'started at ' + s['count'])(state)" in example_app.output

    def test_listeners_wired(self, example_app) -> None:
        assert 'byId("inc");if(el)el.addEventListener("click"' in example_app.output
        assert 'byId("reset");if(el)el.addEventListener("click"' in example_app.output
