# apps/planning/domain/holidays.py
# French public holidays, keyed by local calendar date (YYYY-MM-DD).
# Easter-based dates are listed explicitly, nothing is computed here.

FRENCH_HOLIDAYS = frozenset({
    # 2025
    '2025-01-01',  # Jour de l'An
    '2025-04-21',  # Lundi de Pâques
    '2025-05-01',  # Fête du Travail
    '2025-05-08',  # Victoire 1945
    '2025-05-29',  # Ascension
    '2025-06-09',  # Lundi de Pentecôte
    '2025-07-14',  # Fête Nationale
    '2025-08-15',  # Assomption
    '2025-11-01',  # Toussaint
    '2025-11-11',  # Armistice
    '2025-12-25',  # Noël
    # 2026
    '2026-01-01',
    '2026-04-06',
    '2026-05-01',
    '2026-05-08',
    '2026-05-14',
    '2026-05-25',
    '2026-07-14',
    '2026-08-15',
    '2026-11-01',
    '2026-11-11',
    '2026-12-25',
    # 2027
    '2027-01-01',
    '2027-03-29',
    '2027-05-01',
    '2027-05-06',
    '2027-05-08',
    '2027-05-17',
    '2027-07-14',
    '2027-08-15',
    '2027-11-01',
    '2027-11-11',
    '2027-12-25',
})
