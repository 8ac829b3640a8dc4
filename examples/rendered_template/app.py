"""RenderedTemplate -- a template bound to its view, rendered on demand.

RenderedTemplate(template, view, partials) keeps the values it was given.
- str(rt) renders with them and never raises a TemplateError
- rt.render(view) re-renders with an override

Use case: hand a ready-to-render object to code that only calls str().

Run:
    python app.py
"""

from stache import Environment, RenderedTemplate

env = Environment()
template = env.from_string("<ul>{{#items}}<li>{{>item}}</li>{{/items}}</ul>")

view = {"items": [{"label": "a"}, {"label": "b"}, {"label": "c"}]}
partials = {"item": "{{label}}"}
rt = RenderedTemplate(template, view, partials)

# Full render via str()
full_output = str(rt)

# Same template, different view
override_output = rt.render({"items": [{"label": "z"}]})

# A failing render turns into a diagnostic string under str()
strict_env = Environment(strict_partials=True)
broken = RenderedTemplate(strict_env.from_string("{{>missing}}"))
broken_output = str(broken)


def main() -> None:
    print("=== Full render (str) ===")
    print(full_output)
    print()
    print("=== Override view ===")
    print(override_output)
    print()
    print("=== Failed render ===")
    print(broken_output)


if __name__ == "__main__":
    main()
