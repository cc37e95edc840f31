from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from hybrid_rota.config import Config
from hybrid_rota.people import Person, people_from_json, people_from_names


@dataclass
class InputData:
    people: list[Person]
    cfg: Config

    def __post_init__(self) -> None:
        # accept plain strings too; re-run normalisation so duplicates are caught
        self.people = people_from_names(self.people)

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.people]


def build_input(
    cfg: Config,
    names: Optional[Iterable[str]] = None,
    people_json: str | Path | None = None,
) -> InputData:
    """
    Build an InputData object from a Config and a people source.

    Parameters:
    cfg (Config): the configuration to use
    names (Iterable[str], optional): raw names; blanks are dropped, names trimmed
    people_json (str | Path, optional): JSON file to read people from instead

    Returns:
    InputData: the normalised input data
    """
    if people_json is not None:
        people = people_from_json(people_json)
    else:
        people = people_from_names(names or [])
    return InputData(people=people, cfg=cfg)
