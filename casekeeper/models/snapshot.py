"""Top-level persisted snapshot of all cases and parties."""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

from .case import Case, CaseStatus, Party

DEFAULT_APP_TITLE = "casekeeper"


@dataclass
class AppData:
    """Everything the data file holds."""

    cases: list[Case] = field(default_factory=list)
    parties: list[Party] = field(default_factory=list)
    app_title: str = DEFAULT_APP_TITLE

    def get_case(self, case_id: str) -> Optional[Case]:
        """Get a case by ID."""
        for case in self.cases:
            if case.id == case_id:
                return case
        return None

    def add_case(self, case: Case) -> None:
        """Add a case (newest first)."""
        self.cases.insert(0, case)

    def replace_case(self, case: Case) -> None:
        """Swap in an updated case with the same id."""
        self.cases = [case if c.id == case.id else c for c in self.cases]

    def remove_case(self, case_id: str) -> bool:
        """Hard-delete a whole case. Returns False if it was not there."""
        before = len(self.cases)
        self.cases = [c for c in self.cases if c.id != case_id]
        return len(self.cases) != before

    def set_case_status(self, case_id: str, status: CaseStatus) -> Optional[Case]:
        """Change a case's status. Returns the updated case, or None if missing."""
        case = self.get_case(case_id)
        if case is None:
            return None
        updated = case.with_status(status)
        self.replace_case(updated)
        return updated

    @property
    def open_cases(self) -> list[Case]:
        """Active and dormant cases, in stored order."""
        return [c for c in self.cases if not c.is_archived]

    @property
    def archived_cases(self) -> list[Case]:
        return [c for c in self.cases if c.is_archived]

    def with_cases(self, cases: list[Case]) -> "AppData":
        return replace(self, cases=list(cases))

    # Party directory

    def get_party(self, party_id: str) -> Optional[Party]:
        for party in self.parties:
            if party.id == party_id:
                return party
        return None

    def add_party(self, party: Party) -> None:
        """Add a party to the directory (newest first)."""
        self.parties.insert(0, party)

    def replace_party(self, party: Party) -> bool:
        """
        Swap in an edited party with the same id.

        Cases keep the copies they were linked with.
        """
        if self.get_party(party.id) is None:
            return False
        self.parties = [party if p.id == party.id else p for p in self.parties]
        return True

    def remove_party(self, party_id: str) -> bool:
        """Delete a party from the directory. Returns False if it was not there."""
        before = len(self.parties)
        self.parties = [p for p in self.parties if p.id != party_id]
        return len(self.parties) != before

    def search_parties(self, query: str = "") -> list[Party]:
        """Parties matching a name or ID-code query, sorted by name."""
        found = [p for p in self.parties if p.matches(query)] if query else list(self.parties)
        return sorted(found, key=lambda p: p.name.lower())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "cases": [c.to_dict() for c in self.cases],
            "parties": [p.to_dict() for p in self.parties],
            "app_title": self.app_title,
        }

    @classmethod
    def from_dict(cls, data: Union[dict[str, Any], list]) -> "AppData":
        """Create from a snapshot document.

        A bare list is read as a list of cases (oldest export format).
        """
        if isinstance(data, list):
            return cls(cases=[Case.from_dict(c) for c in data])

        return cls(
            cases=[Case.from_dict(c) for c in data.get("cases") or []],
            parties=[Party.from_dict(p) for p in data.get("parties") or []],
            app_title=data.get("app_title") or data.get("appTitle") or DEFAULT_APP_TITLE,
        )
