"""
Example document and template for proof-of-concept rendering.

Builds the classic "users" document (a list of users plus a nested map) and
the compiled instructions of the matching template:

    * Users:
    {{#users}}{{id}}. {{& name}} ({{name}})
    {{/users}}
    Nested: {{& nested.item }}.
"""
from stache.instructions import Arg, Section, Text
from stache.values import ArrayValue, MapValue, NumberValue, StringValue, Value


def build_example_users_document(user_count: int = 4) -> Value:
    users = []
    for i in range(user_count):
        users.append(MapValue({
            "id": NumberValue(i),
            "name": StringValue(f"User {i}"),
        }))

    return MapValue({
        "users": ArrayValue(tuple(users)),
        "nested": MapValue({"item": StringValue("dot notation success")}),
    })


def build_example_users_template() -> tuple:
    user_line = (
        Arg("id"),
        Text(". "),
        Arg("name", escape=False),
        Text(" ("),
        Arg("name"),
        Text(")\r\n"),
    )
    return (
        Text("* Users:\r\n"),
        Section("users", body=user_line),
        Text("Nested: "),
        Arg("nested.item", escape=False),
        Text("."),
    )
