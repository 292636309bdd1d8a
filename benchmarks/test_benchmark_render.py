"""Rendering benchmarks: LightRender vs Jinja2.

Sizes:
- "minimal": one heading
- "table": 100x10 table of escaped cells (1100 pooled nodes per render)
- "hydrated": 200 stateful counters with listeners (script compilation)

Run with: pytest benchmarks/test_benchmark_render.py --benchmark-only
Compare: pytest benchmarks/test_benchmark_render.py --benchmark-compare
"""

from __future__ import annotations

import pytest
from jinja2 import Environment as Jinja2Environment
from pytest_benchmark.fixture import BenchmarkFixture

from lightrender import Runtime, create_document


def render_minimal(runtime: Runtime) -> str:
    doc = create_document(runtime=runtime)
    doc.use(doc.create("h1").text("Benchmark"))
    return doc.render()


def render_table(runtime: Runtime, rows: list[list[str]]) -> str:
    doc = create_document(runtime=runtime)
    doc.title("Table")
    table = doc.create("table")
    for row in rows:
        tr = doc.create("tr")
        for cell in row:
            tr.append(doc.create("td").text(cell))
        table.append(tr)
    doc.use(table)
    return doc.render()


def render_hydrated(runtime: Runtime, count: int = 200) -> str:
    doc = create_document(runtime=runtime)
    for _ in range(count):
        value = doc.create("span").state(0)
        button = doc.create("button").text("+").bind_state(
            value, "click", "function(){ state['__STATE_ID__'] += 1; }"
        )
        doc.use(doc.create("div").css(display="flex").append(value).append(button))
    return doc.render()


@pytest.mark.benchmark(group="render:minimal")
def test_render_minimal_lightrender(benchmark: BenchmarkFixture, dev_runtime: Runtime) -> None:
    benchmark(render_minimal, dev_runtime)


@pytest.mark.benchmark(group="render:minimal")
def test_render_minimal_jinja2(benchmark: BenchmarkFixture, jinja2_env: Jinja2Environment) -> None:
    template = jinja2_env.get_template("minimal.html")
    benchmark(template.render, name="Benchmark")


@pytest.mark.benchmark(group="render:table")
def test_render_table_lightrender(
    benchmark: BenchmarkFixture, dev_runtime: Runtime, table_rows: list[list[str]]
) -> None:
    benchmark(render_table, dev_runtime, table_rows)


@pytest.mark.benchmark(group="render:table")
def test_render_table_lightrender_prod(
    benchmark: BenchmarkFixture, prod_runtime: Runtime, table_rows: list[list[str]]
) -> None:
    """Production mode adds the minification pass."""
    benchmark(render_table, prod_runtime, table_rows)


@pytest.mark.benchmark(group="render:table")
def test_render_table_jinja2(
    benchmark: BenchmarkFixture, jinja2_env: Jinja2Environment, table_rows: list[list[str]]
) -> None:
    template = jinja2_env.get_template("table.html")
    benchmark(template.render, title="Table", rows=table_rows)


@pytest.mark.benchmark(group="render:hydrated")
def test_render_hydrated_lightrender(benchmark: BenchmarkFixture, dev_runtime: Runtime) -> None:
    html = benchmark(render_hydrated, dev_runtime)
    assert html.count("addEventListener(\"click\"") == 200
