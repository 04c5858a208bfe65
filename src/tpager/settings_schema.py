from tpager.settings import SchemaDict

SCHEMA: list[SchemaDict] = [
    {
        "key": "pager",
        "title": "Pager",
        "type": "object",
        "fields": [
            {
                "key": "tab-width",
                "title": "Tab width",
                "help": "Number of columns a tab character advances the cursor.",
                "type": "integer",
                "default": 8,
                "validate": [{"type": "minimum", "value": 1}],
            },
        ],
    },
]
