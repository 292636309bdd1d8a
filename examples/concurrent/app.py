"""Concurrent rendering -- one runtime, eight threads.

Each thread builds and renders its own document. Documents share the
runtime's node pool, and each render collects styles and hydration data
in its own ContextVar-scoped render context, so simultaneous renders
never see each other's data.

Run:
    python app.py
"""

from concurrent.futures import ThreadPoolExecutor

from lightrender import Runtime, create_document

runtime = Runtime()

pages = [
    {"page_id": i, "title": f"Page {i}", "tags": [f"tag-{i}-a", f"tag-{i}-b", f"tag-{i}-c"]}
    for i in range(8)
]


def render_page(page: dict) -> str:
    """Render a single page -- called from a worker thread."""
    doc = create_document(runtime=runtime)
    article = doc.create("article").id(f"page-{page['page_id']}").state(page["page_id"])
    article.append(doc.create("h1").text(page["title"]))
    items = doc.create("ul").css(color=f"#00000{page['page_id']}")
    for tag in page["tags"]:
        items.append(doc.create("li").text(tag))
    article.append(items)
    doc.use(article)
    return doc.render()


with ThreadPoolExecutor(max_workers=8) as pool:
    results = list(pool.map(render_page, pages))

output = "\n".join(results)


def main() -> None:
    print(f"Rendered {len(results)} pages across 8 threads:\n")
    for i, html in enumerate(results):
        print(f"--- Thread {i} ---")
        print(html)
        print()


if __name__ == "__main__":
    main()
