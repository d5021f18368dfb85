#!/usr/bin/env python3
"""
Demo: Render the example users template.

Shows shadowed lookups inside the users section and dotted-path descent
for nested.item, then the same document round-tripped through YAML.
"""

import logging

from stache.documents import document_from_yaml, document_to_yaml
from stache.examples import build_example_users_document, build_example_users_template
from stache.instructions import render


def main():
    logging.basicConfig(level=logging.INFO)

    document = build_example_users_document(user_count=4)
    template = build_example_users_template()

    print("=" * 80)
    print("STACHE RENDER DEMO")
    print("=" * 80)

    print(render(template, document))

    print("\n" + "-" * 80)
    print("Document as YAML:")
    print("-" * 80)
    yaml_text = document_to_yaml(document)
    print(yaml_text)

    reloaded = render(template, document_from_yaml(yaml_text))
    print(f"Reloaded document renders identically: {reloaded == render(template, document)}")
    print("=" * 80)


if __name__ == "__main__":
    main()
