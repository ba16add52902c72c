from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TimetableSlot:
    """One scheduled class on a weekday.

    An empty ``sub_batches`` means the class is for every batch.
    """

    weekday: str
    time_label: str
    subject: str
    room: str = ""
    sub_batches: tuple[str, ...] = ()
    slot_id: Optional[int] = None

    def applies_to(self, batch: str) -> bool:
        return not self.sub_batches or batch in self.sub_batches

    def to_dict(self) -> dict:
        data = {"time": self.time_label, "subject": self.subject, "room": self.room}
        if self.sub_batches:
            data["subBatches"] = list(self.sub_batches)
        return data
