"""End-to-end document rendering: envelope, escaping, void elements, styles, lifecycle."""

from __future__ import annotations

import pytest

from lightrender import Document, Runtime, create_document
from lightrender.runtime.metrics import RENDER_DURATION

from .helpers import assert_contains, body_of, script_of


class TestEnvelope:
    def test_empty_document(self, doc: Document) -> None:
        assert doc.render() == (
            '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">'
            "<title>Document</title></head><body></body></html>"
        )

    def test_title_is_escaped(self, doc: Document) -> None:
        doc.title("Tom & Jerry")
        assert "<title>Tom &amp; Jerry</title>" in doc.render()

    def test_head_declarations(self, doc: Document) -> None:
        doc.add_meta(name="viewport", content="width=device-width")
        doc.add_link("/app.css").add_link("/app.css")
        doc.add_style("body{margin:0}")
        doc.add_script("/app.js")
        html = doc.render()
        assert_contains(
            html,
            '<meta name="viewport" content="width=device-width">',
            '<link rel="stylesheet" href="/app.css">',
            "<style>body{margin:0}</style>",
            '<script src="/app.js"></script>',
        )
        assert html.count("/app.css") == 1

    def test_lang_from_config(self) -> None:
        from lightrender import RenderConfig

        runtime = Runtime(RenderConfig(lang="fr"))
        assert '<html lang="fr">' in create_document(runtime=runtime).render()

    def test_static_page_has_no_script(self, doc: Document) -> None:
        doc.use(doc.create("p").text("static"))
        assert "<script>" not in doc.render()


class TestWorkedExamples:
    def test_text_is_escaped(self, doc: Document) -> None:
        doc.use(doc.create("div").text("<b>hi</b>"))
        assert body_of(doc.render()) == "<div>&lt;b&gt;hi&lt;/b&gt;</div>"

    def test_void_element(self, doc: Document) -> None:
        doc.use(doc.create("input").attribute("type", "text"))
        assert body_of(doc.render()) == '<input type="text">'

    def test_void_element_ignores_children(self, doc: Document) -> None:
        doc.use(doc.create("br").text("lost").append(doc.create("span")))
        assert body_of(doc.render()) == "<br>"

    def test_shared_style_emitted_once(self, doc: Document) -> None:
        first = doc.create("div").css(color="red")
        second = doc.create("p").css(color="red")
        class_name = first.attributes["class"]
        assert second.attributes["class"] == class_name
        doc.use(first, second)
        html = doc.render()
        assert html.count(f".{class_name}{{color:red;}}") == 1

    def test_css_value_cannot_open_comment(self, doc: Document) -> None:
        doc.use(doc.create("div").css(color="red/;*"), doc.create("p").css(margin="0"))
        html = doc.render()
        style = html[html.index("<style>") : html.index("</style>")]
        assert "/*" not in style
        assert "{margin:0;}" in style


class TestAttributeRendering:
    def test_values_are_escaped(self, doc: Document) -> None:
        doc.use(doc.create("a").attribute("title", '"quoted" <tag>'))
        assert body_of(doc.render()) == '<a title="&quot;quoted&quot; &lt;tag&gt;"></a>'

    def test_boolean_attributes(self, doc: Document) -> None:
        doc.use(doc.create("input").attribute("disabled", True).attribute("hidden", False))
        assert body_of(doc.render()) == "<input disabled>"

    def test_none_is_omitted(self, doc: Document) -> None:
        doc.use(doc.create("div").attribute("title", None))
        assert body_of(doc.render()) == "<div></div>"

    def test_insertion_order(self, doc: Document) -> None:
        doc.use(doc.create("a").attribute("href", "/").attribute("class", "x").id("l"))
        assert body_of(doc.render()) == '<a href="/" class="x" id="l"></a>'


class TestNesting:
    def test_children_render_in_order(self, doc: Document) -> None:
        items = doc.create("ul")
        for label in ("one", "two"):
            items.append(doc.create("li").text(label))
        doc.use(items)
        assert body_of(doc.render()) == "<ul><li>one</li><li>two</li></ul>"

    def test_use_fragment(self, doc: Document) -> None:
        def layout(d: Document):
            return [d.create("header").text("top"), "ignored", d.create("footer")]

        doc.use_fragment(layout).use_fragment(lambda d: d.create("main")).use_fragment(
            lambda d: None
        )
        assert body_of(doc.render()) == "<header>top</header><footer></footer><main></main>"

    def test_non_nodes_are_ignored_by_use(self, doc: Document) -> None:
        doc.use("text", None, doc.create("hr"))  # type: ignore[arg-type]
        assert body_of(doc.render()) == "<hr>"


class TestLifecycle:
    def test_render_clears_document(self, doc: Document) -> None:
        doc.title("Once")
        node = doc.create("div").state(1)
        doc.use(node)
        doc.render()
        assert doc.body == []
        assert doc.state_store == {}
        assert node._pooled
        assert "<title>Document</title>" in doc.render()

    def test_nodes_are_recycled(self, runtime: Runtime) -> None:
        doc = create_document(runtime=runtime)
        doc.use(doc.create("div").append(doc.create("span")))
        doc.render()
        assert runtime.pool.stats()["nodes"] == 2

        doc.use(doc.create("p"))
        assert runtime.pool.stats()["nodes"] == 1

    def test_render_context_lists_are_returned(self, runtime: Runtime) -> None:
        create_document(runtime=runtime).render()
        assert runtime.pool.stats()["lists"] == 5

    def test_render_duration_recorded(self, doc: Document) -> None:
        doc.render()
        assert len(doc.runtime.metrics.timings(RENDER_DURATION)) == 1

    def test_failed_render_still_clears(self, doc: Document, monkeypatch) -> None:
        import lightrender.dom.document as document_module

        def boom(*args, **kwargs):
            raise RuntimeError("render failed")

        monkeypatch.setattr(document_module, "render_body", boom)
        doc.use(doc.create("div"))
        with pytest.raises(RuntimeError):
            doc.render()
        assert doc.body == []


class TestDocumentCache:
    def test_participating_document_is_cached(self, runtime: Runtime) -> None:
        first = create_document(use_cache=True, cache_key="page", runtime=runtime)
        first.use(first.create("h1").text("v1"))
        html = first.render()
        assert runtime.cache.get("page") == html

        second = create_document(use_cache=True, cache_key="page", runtime=runtime)
        second.use(second.create("h1").text("v2"))
        assert second.render() == html
        assert second.body == []

    def test_without_key_nothing_is_cached(self, runtime: Runtime) -> None:
        create_document(use_cache=True, runtime=runtime).render()
        assert len(runtime.cache) == 0


class TestProductionMode:
    def test_output_is_minified(self, prod_runtime: Runtime) -> None:
        doc = create_document(runtime=prod_runtime)
        doc.use(doc.create("div").append_unsafe("\n    <span>a</span>\n"))
        assert "<div><span>a</span></div>" in doc.render()

    def test_hydration_script_still_emitted(self, prod_runtime: Runtime) -> None:
        doc = create_document(runtime=prod_runtime)
        doc.use(doc.create("span").state(5))
        assert "=5;" in script_of(doc.render())
