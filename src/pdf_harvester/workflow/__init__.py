from pdf_harvester.workflow.collect import collect
from pdf_harvester.workflow.links import links

__all__ = [
    "collect",
    "links",
]
