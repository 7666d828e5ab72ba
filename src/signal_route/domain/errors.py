class GraphLoadError(Exception):
    """The graph source could not be obtained or has no parseable root. No graph is produced."""


class AttributeParseError(GraphLoadError):
    def __init__(self, element_id: str, attr: str, raw: str):
        super().__init__(f"{element_id}: attribute {attr!r} is not a finite number: {raw!r}")
        self.element_id, self.attr, self.raw = element_id, attr, raw
