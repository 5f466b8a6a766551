# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Useful links for the duty holder (read-only).
"""

from hausmeister.models.domain import LinkEntry

DEFAULT_LINKS: tuple[LinkEntry, ...] = (
    LinkEntry(name="Artemis", url="https://artemis.cit.tum.de"),
    LinkEntry(name="JIRA", url="https://jira.ase.in.tum.de"),
    LinkEntry(name="Confluence", url="https://confluence.ase.in.tum.de"),
    LinkEntry(name="Bitbucket", url="https://bitbucket.ase.in.tum.de"),
    LinkEntry(name="Bamboo", url="https://bamboo.ase.in.tum.de"),
    LinkEntry(name="Status", url="https://status.ase.in.tum.de"),
    LinkEntry(name="Grafana", url="https://grafana.gchq.ase.in.tum.de"),
    LinkEntry(name="Website", url="https://ase.cit.tum.de"),
    LinkEntry(name="Github", url="https://github.com/ls1intum"),
)


class LinkRepository:
    def __init__(self) -> None:
        self._links = DEFAULT_LINKS

    def get_all(self) -> list[LinkEntry]:
        return list(self._links)

    def count(self) -> int:
        return len(self._links)
