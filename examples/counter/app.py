"""Counter -- state, bindings and event handlers hydrated in the browser.

The span holds a state value; the buttons change it through
``bind_state`` (``__STATE_ID__`` becomes the span's id), and a label
re-renders whenever the count changes.

Run:
    python app.py > counter.html
"""

from lightrender import Runtime, create_document

runtime = Runtime()

doc = create_document(runtime=runtime)
doc.title("Counter")
doc.head.add_class("btn", padding="4px 12px", marginLeft="4px")

count = doc.create("span").id("count").state(0)
increment = (
    doc.create("button")
    .id("inc")
    .attribute("class", "btn")
    .text("+1")
    .bind_state(count, "click", "function(){ state['__STATE_ID__'] += 1; }")
)
reset = (
    doc.create("button")
    .id("reset")
    .attribute("class", "btn")
    .text("reset")
    .bind_state(count, "click", "function(){ state['__STATE_ID__'] = 0; }")
)
label = doc.create("p").id("label").bind(count, "n => n === 1 ? '1 click' : n + ' clicks'")
total = doc.create("small").id("total").computed("s => 'started at ' + s['count']")

toolbar = doc.create("div").css(display="flex", gap="8px")
toolbar.append(count).append(increment).append(reset)

doc.use(toolbar)
doc.use(label, total)

output = doc.render()


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
