"""Live Counter — a server-side component pushed over SSE.

Two components share one app. The counter changes when a form is
POSTed to ``/update/counter``; every open page sees the new value on the
next push tick, with no client-side state at all. The todo list keeps a
list of dicts in component state and edits it atomically.

Run:
    python app.py
"""

from glint import App, AppConfig, Component, Context

app = App(AppConfig(push_interval=1.0))

# ---------------------------------------------------------------------------
# Counter
# ---------------------------------------------------------------------------

COUNTER_TEMPLATE = """<div id="{{ name }}">
  <p>Count: {{ count }}</p>
  <form method="post" action="/update/counter" data-glint-update>
    <button name="action" value="increment">+</button>
    <button name="action" value="decrement">-</button>
    <button name="action" value="reset">Reset</button>
  </form>
</div>"""


def update_counter(component: Component, ctx: Context) -> None:
    """Apply the posted action; a bare POST increments."""
    action = ctx.form.get("action", "increment") if ctx.form else "increment"
    count = component.get("count", 0)
    if action == "decrement":
        count -= 1
    elif action == "reset":
        count = 0
    else:
        count += 1
    component.set_state("count", count)


counter = Component("counter", COUNTER_TEMPLATE, {"count": 0}, update_counter)

# ---------------------------------------------------------------------------
# Todo list
# ---------------------------------------------------------------------------

TODO_TEMPLATE = """<div id="{{ name }}">
  <ul>
  {% for item in items %}
    <li class="{{ 'done' if item['done'] else '' }}">{{ item["text"] }}</li>
  {% end %}
  </ul>
  <p>{{ items | length }} item(s)</p>
  <form method="post" action="/update/todo" data-glint-update>
    <input name="text" placeholder="What needs doing?">
    <button name="action" value="add">Add</button>
  </form>
</div>"""


def update_todo(component: Component, ctx: Context) -> None:
    """Handle ``add``, ``toggle`` and ``delete`` actions."""
    form = ctx.form
    if form is None:
        return
    action = form.get("action", "add")

    with component.locked() as state:
        items = state["items"]
        if action == "add":
            text = (form.get("text") or "").strip()
            if text:
                items.append({"id": state["next_id"], "text": text, "done": False})
                state["next_id"] += 1
            return

        item_id = int(form.get("id") or 0)
        if action == "toggle":
            for item in items:
                if item["id"] == item_id:
                    item["done"] = not item["done"]
        elif action == "delete":
            state["items"] = [item for item in items if item["id"] != item_id]


todo = Component("todo", TODO_TEMPLATE, {"items": [], "next_id": 1}, update_todo)

# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

app.mount(counter, page="/")
app.mount(todo, page="/todo")


@app.route("/health")
def health(ctx: Context) -> str:
    return "ok"


if __name__ == "__main__":
    app.run()
