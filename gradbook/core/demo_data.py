"""Demo Records: sample graduates written into an empty collection on first start.

Invariants:
    - Entries carry no id; the seeding service assigns fresh ids
    - Every entry passes validate_record for any current year >= 2024
"""

from gradbook.core.domain_types import RecordCandidate


DEMO_GRADUATES: tuple[RecordCandidate, ...] = (
    {
        "fullName": "Иванов Иван", "year": "2023", "major": "Программирование",
        "company": "TechSoft", "position": "Frontend разработчик",
        "status": "Трудоустроен",
    },
    {
        "fullName": "Петров Петр", "year": "2022", "major": "Информационные системы",
        "company": "DataWorks", "position": "Аналитик", "status": "Трудоустроен",
    },
    {
        "fullName": "Сидорова Анна", "year": "2024", "major": "Дизайн",
        "company": "Creativa", "position": "UI/UX дизайнер", "status": "Ищет работу",
    },
    {
        "fullName": "Кузнецов Олег", "year": "2021", "major": "Экономика",
        "company": "FinCorp", "position": "Экономист", "status": "Трудоустроен",
    },
)
