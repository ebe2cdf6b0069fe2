"""
Weekly doctor availability.

The store keeps it as JSON text; everywhere else it is a Schedule value:
``{"monday": [{"start": "09:00", "end": "12:00"}, ...], ...}``.
"""
import json
from dataclasses import dataclass
from datetime import time

from portal.errors import ValidationError

WEEKDAYS = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')


@dataclass(frozen=True)
class TimeSlot:
    start: time
    end: time

    def to_dict(self):
        return {'start': self.start.strftime('%H:%M'), 'end': self.end.strftime('%H:%M')}


@dataclass(frozen=True)
class Schedule:
    days: tuple  # ((weekday, (TimeSlot, ...)), ...) in WEEKDAYS order

    @classmethod
    def parse(cls, value):
        """Build a Schedule from a mapping or its JSON text; raises ValidationError."""
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                raise ValidationError(errors=['availability must be valid JSON'])
        if not isinstance(value, dict):
            raise ValidationError(errors=['availability must map weekdays to time slots'])

        errors = []
        days = {}
        for day, slots in value.items():
            key = str(day).lower()
            if key not in WEEKDAYS:
                errors.append(f'availability: unknown weekday "{day}"')
                continue
            if not isinstance(slots, list):
                errors.append(f'availability: {key} must be a list of time slots')
                continue
            parsed = []
            for slot in slots:
                try:
                    start = time.fromisoformat(slot['start'])
                    end = time.fromisoformat(slot['end'])
                except (TypeError, KeyError, ValueError):
                    errors.append(f'availability: {key} slots need start and end as HH:MM')
                    continue
                if start >= end:
                    errors.append(f'availability: {key} slot must end after it starts')
                    continue
                parsed.append(TimeSlot(start, end))
            days[key] = tuple(sorted(parsed, key=lambda s: s.start))
        if errors:
            raise ValidationError(errors=errors)
        return cls(tuple((day, days[day]) for day in WEEKDAYS if day in days))

    def to_dict(self):
        return {day: [slot.to_dict() for slot in slots] for day, slots in self.days}

    def to_json(self):
        return json.dumps(self.to_dict())
