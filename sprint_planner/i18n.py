"""
Report label dictionaries.

Lookup only: an unknown locale falls back to Turkish and an unknown key is
returned as-is.
"""

DEFAULT_LOCALE = "tr"

DICTIONARIES = {
    "tr": {
        "report.effort.title": "KALAN EFORLAR",
        "report.capacity.title": "SPRINT KAPASİTESİ",
        "report.summary": "ÖZET",
        "report.people": "KİŞİLER",
        "report.sprint_hours": "Sprint saati",
        "report.team_capacity": "Takım kapasitesi",
        "report.planned": "Planlanan",
        "report.leave": "İzin/Eğitim",
        "report.remaining": "Kalan",
        "report.hours_left": "saat kaldı",
        "report.business_days": "İş günü",
        "report.no_people": "Tanımlı kişi yok",
        "report.no_sprints": "Tanımlı sprint yok",
        "report.unknown_people": "Bilinmeyen kişi",
        "status.healthy": "Uygun",
        "status.at_capacity": "Dolu",
        "status.overloaded": "Aşırı yüklü",
    },
    "en": {
        "report.effort.title": "REMAINING EFFORT",
        "report.capacity.title": "SPRINT CAPACITY",
        "report.summary": "SUMMARY",
        "report.people": "PEOPLE",
        "report.sprint_hours": "Sprint hours",
        "report.team_capacity": "Team capacity",
        "report.planned": "Planned",
        "report.leave": "Leave/Training",
        "report.remaining": "Remaining",
        "report.hours_left": "hours left",
        "report.business_days": "Business days",
        "report.no_people": "No people defined",
        "report.no_sprints": "No sprints defined",
        "report.unknown_people": "Unknown people",
        "status.healthy": "Healthy",
        "status.at_capacity": "At capacity",
        "status.overloaded": "Overloaded",
    },
}


def translate(key: str, locale: str = DEFAULT_LOCALE) -> str:
    dictionary = DICTIONARIES.get(locale) or DICTIONARIES[DEFAULT_LOCALE]
    return dictionary.get(key, key)
