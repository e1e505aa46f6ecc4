"""
Static catalog of canonical listing fields and their known header aliases.

Aliases mix three vocabularies for the same column: the ministerial template
wording, vendor export wording and ad-hoc user wording (Polish and English).
Within a field, more specific aliases come first. The table is read-only and
shared by every parse call.
"""

from __future__ import annotations

from listing_doctor.models import FieldPattern

# ══════════════════════════════════════════════════════════════════════════════
# FIELD ALIASES
# ══════════════════════════════════════════════════════════════════════════════

_ALIAS_TABLE: dict[str, list[str]] = {
    # ── Basic unit data ───────────────────────────────────────────────────────
    "property_number": [
        "nr nieruchomości nadany przez dewelopera",
        "nr nieruchomosci nadany przez dewelopera",
        "nr lokalu lub domu jednorodzinnego nadany przez dewelopera",
        "oznaczenie lokalu nadane przez dewelopera",
        "nr lokalu", "numer lokalu", "nr mieszkania", "numer mieszkania",
        "lokal", "mieszkanie", "property_number", "apartment_number",
        "nr_lokalu", "numer_lokalu", "mieszkanie_nr",
        "nr",
    ],
    "property_type": [
        "typ", "typ lokalu", "typ mieszkania", "rodzaj", "property_type",
        "type", "kategoria", "typ_lokalu", "rodzaj_lokalu",
    ],
    # ── Prices ────────────────────────────────────────────────────────────────
    "price_per_m2": [
        "cena za m2 nieruchomości",
        "cena za m2 nieruchomosci",
        "cena m 2 powierzchni użytkowej lokalu mieszkalnego / domu jednorodzinnego [zł]",
        "cena metra kwadratowego powierzchni użytkowej",
        "cena za m²", "cena za m2", "cena m2", "cena m²", "cena/m2", "cena/m²",
        "cena za m 2", "cena m 2", "cena/m 2",
        "price_per_m2", "price_per_sqm", "cena_za_m2", "cena_m2", "cena za metr",
    ],
    "total_price": [
        "cena nieruchomości",
        "cena nieruchomosci",
        "cena lokalu mieszkalnego lub domu jednorodzinnego będących przedmiotem umowy "
        "stanowiąca iloczyn ceny m2 oraz powierzchni [zł]",
        "cena będąca iloczynem powierzchni oraz metrażu",
        "cena całkowita", "cena calkowita", "cena", "cena brutto", "cena bazowa",
        "total_price", "price", "cena_calkowita", "cena_bazowa", "cena_brutto",
    ],
    "final_price": [
        "cena finalna", "cena końcowa", "cena ostateczna", "final_price",
        "cena_finalna", "cena_koncowa", "cena_ostateczna",
        "cena lokalu mieszkalnego lub domu jednorodzinnego uwzględniająca cenę lokalu "
        "stanowiącą iloczyn powierzchni oraz metrażu i innych składowych ceny, o których "
        "mowa w art. 19a ust. 1 pkt 1), 2) lub 3) [zł]",
        "cena uwzględniająca wszystkie składowe",
    ],
    # ── Areas ─────────────────────────────────────────────────────────────────
    # The ministerial template has no area column; area is derived from prices.
    "area": [
        "powierzchnia", "powierzchnia użytkowa", "powierzchnia m²", "powierzchnia m2",
        "area", "size", "metraż", "pow", "powierzchnia_uzytkowa", "m2", "m²",
    ],
    "powierzchnia_balkon": [
        "balkon", "powierzchnia balkonu", "balcony", "powierzchnia_balkon",
        "pow balkonu", "balkon m2", "balkon m²",
    ],
    "powierzchnia_taras": [
        "taras", "powierzchnia tarasu", "terrace", "powierzchnia_taras",
        "pow tarasu", "taras m2", "taras m²",
    ],
    "powierzchnia_loggia": [
        "loggia", "powierzchnia loggii", "powierzchnia_loggia",
        "pow loggii", "loggia m2", "loggia m²",
    ],
    "powierzchnia_ogrod": [
        "ogród", "ogrod", "powierzchnia ogrodu", "garden", "powierzchnia_ogrod",
        "pow ogrodu", "ogród m2", "ogród m²",
    ],
    # ── Unit details ──────────────────────────────────────────────────────────
    "kondygnacja": [
        "kondygnacja", "piętro", "pietro", "floor", "level",
        "poziom", "kondygnacja_nr", "nr_pietra",
    ],
    "liczba_pokoi": [
        "pokoje", "liczba pokoi", "rooms", "liczba_pokoi", "ilosc_pokoi",
        "nr pokoi", "rooms_count", "pokoi",
    ],
    # ── Location hierarchy ────────────────────────────────────────────────────
    "wojewodztwo": [
        "województwo", "wojewodztwo", "voivodeship", "region",
        "woj", "woj.", "province",
        "województwo lokalizacji przedsięwzięcia deweloperskiego lub zadania inwestycyjnego",
        "województwo adresu siedziby/głównego miejsca wykonywania działalności gospodarczej dewelopera",
    ],
    "powiat": [
        "powiat", "county", "district", "pow", "pow.",
        "powiat lokalizacji przedsięwzięcia deweloperskiego lub zadania inwestycyjnego",
        "powiat adresu siedziby/głównego miejsca wykonywania działalności gospodarczej dewelopera",
    ],
    "gmina": [
        "gmina", "municipality", "commune", "gm", "gm.",
        "gmina lokalizacji przedsięwzięcia deweloperskiego lub zadania inwestycyjnego",
        "gmina adresu siedziby/głównego miejsca wykonywania działalności gospodarczej dewelopera",
    ],
    "miejscowosc": [
        "miejscowość", "miejscowosc", "miasto", "city", "town",
        "locality", "place",
        "miejscowość lokalizacji przedsięwzięcia deweloperskiego lub zadania inwestycyjnego",
        "miejscowość adresu siedziby/głównego miejsca wykonywania działalności gospodarczej dewelopera",
    ],
    "ulica": [
        "ulica", "ul", "ul.", "street", "adres", "address",
        "ulica lokalizacji przedsięwzięcia deweloperskiego lub zadania inwestycyjnego",
        "ulica adresu siedziby/głównego miejsca wykonywania działalności gospodarczej dewelopera",
    ],
    "numer_nieruchomosci": [
        "numer nieruchomości", "nr nieruchomości", "numer_nieruchomosci",
        "nr budynku", "building_number", "house_number",
    ],
    "kod_pocztowy": [
        "kod pocztowy", "kod_pocztowy", "postal_code", "zip_code",
        "zip", "postal",
    ],
    # ── Price history and dates ───────────────────────────────────────────────
    "cena_za_m2_poczatkowa": [
        "cena początkowa za m²", "cena startowa m2", "initial_price_m2",
        "cena_za_m2_poczatkowa", "first_price_m2",
    ],
    "cena_bazowa_poczatkowa": [
        "cena bazowa początkowa", "cena startowa", "initial_price",
        "cena_bazowa_poczatkowa", "starting_price",
    ],
    "data_pierwszej_oferty": [
        "data pierwszej oferty", "first_offer_date", "offer_date",
        "data_pierwszej_oferty", "data oferty",
    ],
    "data_pierwszej_sprzedazy": [
        "data pierwszej sprzedaży", "first_sale_date", "sale_date",
        "data_pierwszej_sprzedazy", "data sprzedaży",
    ],
    "price_valid_from": [
        "data od", "obowiązuje od", "price_valid_from", "valid_from",
        "cena od", "od kiedy",
        "data od której cena obowiązuje cena m 2 powierzchni użytkowej lokalu mieszkalnego "
        "/ domu jednorodzinnego",
        "data od której obowiązuje cena lokalu mieszkalnego lub domu jednorodzinnego "
        "uwzględniająca cenę lokalu stanowiącą iloczyn powierzchni oraz metrażu i innych "
        "składowych ceny, o których mowa w art. 19a ust. 1 pkt 1), 2) lub 3)",
        "data od której cena obowiązuje",
    ],
    "price_valid_to": [
        "data do", "obowiązuje do", "price_valid_to", "valid_to",
        "cena do", "do kiedy",
    ],
    # ── Parking and storage ───────────────────────────────────────────────────
    "parking_space": [
        "parking", "miejsce parkingowe", "garaż", "parking space", "parking_space",
        "miejsce_parkingowe", "mp", "parking_spot", "garage",
        "nr przypisanego miejsca parkingowego / garażu [1]",
        "numer miejsca parkingowego garażu",
    ],
    "parking_price": [
        "cena parkingu", "cena garażu", "parking price", "parking_price",
        "cena_parkingu", "cena_garazu", "parking_cost",
        "cena przypisanego miejsca parkingowego / garażu [1]",
        "cena miejsca parkingowego garażu",
    ],
    "miejsca_postojowe_nr": [
        "nr miejsc parkingowych", "parking_numbers", "parking_spaces",
        "miejsca_postojowe_nr", "numery parkingów",
        "nr przypisanego miejsca parkingowego / garażu [1]",
    ],
    "miejsca_postojowe_ceny": [
        "ceny miejsc parkingowych", "parking_prices", "parking_costs",
        "miejsca_postojowe_ceny", "ceny parkingów",
        "cena przypisanego miejsca parkingowego / garażu [1]",
    ],
    "komorki_nr": [
        "nr komórek", "storage_numbers", "komorki_nr",
        "numery komórek", "storage_rooms",
    ],
    "komorki_ceny": [
        "ceny komórek", "storage_prices", "komorki_ceny",
        "ceny pomieszczeń", "storage_costs",
    ],
    # ── Status ────────────────────────────────────────────────────────────────
    "status": [
        "status", "dostępność", "stan", "availability", "dostepnosc",
        "stan_sprzedaży", "stan_sprzedazy",
    ],
    "status_dostepnosci": [
        "status dostępności", "availability_status", "dostępny",
        "status_dostepnosci", "current_status",
    ],
    "data_rezerwacji": [
        "data rezerwacji", "rezerwacja", "reserved_date",
        "data_rezerwacji", "zarezerwowano",
    ],
    "data_sprzedazy": [
        "data sprzedaży", "sprzedaż", "sale_date",
        "data_sprzedazy", "sprzedano",
    ],
    # ── Building ──────────────────────────────────────────────────────────────
    "construction_year": [
        "rok budowy", "construction_year", "year_built",
        "rok_budowy", "built_year",
    ],
    "building_permit_number": [
        "nr pozwolenia na budowę", "pozwolenie budowlane", "building_permit",
        "building_permit_number", "permit_number",
    ],
    "energy_class": [
        "klasa energetyczna", "energy_class", "energy_rating",
        "efektywność energetyczna", "energia",
    ],
    "certyfikat_energetyczny": [
        "certyfikat energetyczny", "energy_certificate",
        "certyfikat_energetyczny", "certificate",
    ],
    "rok_budowy": [
        "rok budowy", "rok zakończenia budowy", "year_built", "construction_year",
        "data oddania", "rok_budowy", "year_of_construction",
    ],
    "klasa_energetyczna": [
        "klasa energetyczna", "energy_class", "certyfikat energetyczny",
        "energy_rating", "klasa_energetyczna", "efektywność",
    ],
    "system_grzewczy": [
        "system grzewczy", "ogrzewanie", "heating_system", "grzewczy",
        "system_grzewczy", "typ ogrzewania",
    ],
    "standard_wykonczenia": [
        "standard wykończenia", "standard", "wykończenie", "finishing_standard",
        "standard_wykonczenia", "stan wykończenia",
    ],
    "typ_budynku": [
        "typ budynku", "rodzaj budynku", "building_type", "typ_budynku",
        "kategoria budynku", "forma zabudowy",
    ],
    "rodzaj_wlasnosci": [
        "rodzaj własności", "własność", "prawo własności", "ownership_type",
        "rodzaj_wlasnosci", "status prawny",
    ],
    "dostep_dla_niepelnosprawnych": [
        "dostęp dla niepełnosprawnych", "niepełnosprawni", "accessibility",
        "dostep_dla_niepelnosprawnych", "przystosowanie",
    ],
    "powierzchnia_piwnica": [
        "piwnica", "powierzchnia piwnicy", "basement", "powierzchnia_piwnica",
        "piwnica m2", "pomieszczenie piwniczna",
    ],
    "powierzchnia_strych": [
        "strych", "powierzchnia strychu", "attic", "powierzchnia_strych",
        "strych m2", "poddasze",
    ],
    "powierzchnia_garaz": [
        "garaż", "powierzchnia garażu", "garage", "powierzchnia_garaz",
        "garaż m2", "garaż wewnętrzny",
    ],
    "ekspozycja": [
        "ekspozycja", "strony świata", "orientation", "nasłonecznienie",
        "kierunki świata", "exposure",
    ],
    "nr_ksiegi_wieczystej": [
        "księga wieczysta", "nr księgi", "land_registry", "nr_ksiegi_wieczystej",
        "numer księgi wieczystej",
    ],
    # ── Permits ───────────────────────────────────────────────────────────────
    "nr_pozwolenia_budowlanego": [
        "nr pozwolenia na budowę", "pozwolenie budowlane", "building_permit",
        "nr_pozwolenia_budowlanego", "permit_number",
    ],
    "data_wydania_pozwolenia": [
        "data pozwolenia", "data wydania pozwolenia", "permit_date",
        "data_wydania_pozwolenia", "kiedy wydane pozwolenie",
    ],
    "organ_wydajacy_pozwolenie": [
        "organ wydający", "urząd", "building_authority", "organ_wydajacy_pozwolenie",
        "kto wydał pozwolenie",
    ],
    "nr_decyzji_uzytkowej": [
        "decyzja użytkowa", "pozwolenie na użytkowanie", "occupancy_permit",
        "nr_decyzji_uzytkowej", "użytkowanie",
    ],
    "data_decyzji_uzytkowej": [
        "data decyzji użytkowej", "kiedy użytkowanie", "occupancy_date",
        "data_decyzji_uzytkowej", "data oddania do użytku",
    ],
    # ── Costs and legal ───────────────────────────────────────────────────────
    "additional_costs": [
        "koszty dodatkowe", "additional_costs", "extra_costs",
        "opłaty dodatkowe", "fees",
    ],
    "vat_rate": [
        "stawka vat", "vat", "vat_rate", "tax_rate",
        "podatek", "vat %",
    ],
    "legal_status": [
        "status prawny", "legal_status", "ownership",
        "własność", "prawo własności",
    ],
    # ── Developer ─────────────────────────────────────────────────────────────
    "developer_name": [
        "deweloper", "nazwa dewelopera", "developer", "developer_name",
        "firma", "nazwa_dewelopera",
    ],
    "company_name": [
        "nazwa firmy", "company", "company_name", "nazwa_firmy",
        "firma", "spółka", "spolka", "nazwa dewelopera",
    ],
    "nip": [
        "nip", "nr nip", "numer nip", "tax_id", "vat_id", "nr_nip",
    ],
    "phone": [
        "telefon", "tel", "phone", "numer telefonu", "kontakt",
        "tel.", "telefon_kontaktowy", "numer_telefonu",
    ],
    "email": [
        "email", "e-mail", "mail", "adres email", "contact_email",
        "email_kontaktowy", "adres_email",
    ],
    "forma_prawna": [
        "forma prawna", "typ spółki", "legal_form", "forma_prawna",
        "rodzaj działalności", "status prawny firmy", "forma prawna dewelopera",
    ],
    "adres_siedziby": [
        "adres siedziby", "siedziba", "headquarters_address", "adres_siedziby",
        "adres firmy", "adres główny",
    ],
    "strona_internetowa": [
        "strona internetowa", "www", "website", "strona_internetowa",
        "adres www", "portal",
    ],
    "osoba_kontaktowa": [
        "osoba kontaktowa", "kontakt", "contact_person", "osoba_kontaktowa",
        "przedstawiciel", "odpowiedzialny",
    ],
    # ── Investment ────────────────────────────────────────────────────────────
    "investment_name": [
        "inwestycja", "nazwa inwestycji", "project", "investment",
        "investment_name", "projekt", "nazwa_inwestycji", "osiedle",
    ],
    "investment_address": [
        "adres", "adres inwestycji", "address",
        "investment_address", "adres_inwestycji", "lokalizacja",
    ],
    "investment_city": [
        "miasto", "miejscowość", "city", "town", "gmina",
        "miejscowosc", "investment_city",
    ],
    # ── Building and unit extras ──────────────────────────────────────────────
    "budynek": [
        "budynek", "numer budynku", "building", "building_number",
        "nr budynku", "budynek_nr",
    ],
    "klatka": [
        "klatka", "klatka schodowa", "staircase", "nr klatki",
        "klatka_schodowa", "entrance",
    ],
    "stan_wykonczenia": [
        "stan wykończenia", "wykończenie", "finishing", "standard",
        "stan_wykonczenia",
    ],
    "technologia_budowy": [
        "technologia budowy", "konstrukcja", "building_technology",
        "technologia_budowy", "typ konstrukcji",
    ],
    "powierzchnia_calkowita": [
        "powierzchnia całkowita", "pow całkowita", "total_area",
        "powierzchnia_calkowita", "całkowita m2",
    ],
    "powierzchnia_piwnicy": [
        "powierzchnia piwnicy", "piwnica m2", "basement_area",
        "powierzchnia_piwnicy", "piwnica",
    ],
    "powierzchnia_strychu": [
        "powierzchnia strychu", "strych m2", "attic_area",
        "powierzchnia_strychu", "poddasze",
    ],
    "miejsca_postojowe_liczba": [
        "liczba miejsc parkingowych", "liczba parkingów", "parking_count",
        "miejsca_postojowe_liczba", "ile parkingów",
    ],
    "miejsca_postojowe_rodzaj": [
        "rodzaj parkingu", "typ parkingu", "parking_type",
        "miejsca_postojowe_rodzaj", "typ miejsc parkingowych",
    ],
    "komorki_lokatorskie_liczba": [
        "liczba komórek", "ile komórek", "storage_count",
        "komorki_lokatorskie_liczba", "liczba pomieszczeń",
    ],
    "komorki_lokatorskie_powierzchnie": [
        "powierzchnie komórek", "komórki m2", "storage_areas",
        "komorki_lokatorskie_powierzchnie", "powierzchnia komórek",
    ],
    "winda": [
        "winda", "elevator", "lift", "dostęp windą",
        "czy winda", "wind",
    ],
    "klimatyzacja": [
        "klimatyzacja", "klima", "air_conditioning", "ac",
        "czy klimatyzacja", "klimatyzowana",
    ],
    "ogrzewanie": [
        "ogrzewanie", "heating", "system grzewczy", "typ ogrzewania",
        "źródło ciepła", "heating_type",
    ],
    "widok_z_okien": [
        "widok z okien", "widok", "view", "panorama",
        "widok_z_okien", "na co widok",
    ],
    "data_przekazania": [
        "data przekazania", "przekazanie", "handover_date",
        "data_przekazania", "oddano",
    ],
    "forma_wlasnosci": [
        "forma własności", "typ własności", "ownership_type",
        "forma_wlasnosci", "własność",
    ],
    "ksiega_wieczysta": [
        "księga wieczysta", "nr księgi", "land_registry",
        "ksiega_wieczysta", "numer księgi wieczystej",
    ],
    "udzial_w_gruncie": [
        "udział w gruncie", "udział gruntu", "land_share",
        "udzial_w_gruncie", "procent gruntu",
    ],
    "waluta": [
        "waluta", "currency", "pln", "eur", "usd",
        "w jakiej walucie", "symbol waluty",
    ],
}

FIELD_PATTERNS: tuple[FieldPattern, ...] = tuple(
    FieldPattern(name=name, aliases=tuple(aliases)) for name, aliases in _ALIAS_TABLE.items()
)
FIELD_NAMES: tuple[str, ...] = tuple(pattern.name for pattern in FIELD_PATTERNS)
_PATTERNS_BY_NAME = {pattern.name: pattern for pattern in FIELD_PATTERNS}


def get_pattern(name: str) -> FieldPattern:
    try:
        return _PATTERNS_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown canonical field: {name!r}") from None


# ══════════════════════════════════════════════════════════════════════════════
# FIELD GROUPS
# ══════════════════════════════════════════════════════════════════════════════

PRICE_MARKER_FIELDS = ("price_per_m2", "total_price", "final_price")

FLOAT_FIELDS = frozenset({
    "price_per_m2",
    "total_price",
    "final_price",
    "area",
    "parking_price",
    "powierzchnia_balkon",
    "powierzchnia_taras",
    "powierzchnia_loggia",
    "powierzchnia_ogrod",
})
INTEGER_FIELDS = frozenset({"liczba_pokoi", "kondygnacja", "construction_year"})
NUMERIC_FIELDS = FLOAT_FIELDS | INTEGER_FIELDS

CRITICAL_FIELDS = (
    "property_number",
    "total_price",
    "area",
    "price_per_m2",
    "wojewodztwo",
    "powiat",
    "gmina",
)

RECOMMENDED_FIELDS = (
    "property_type",
    "status",
    "miejscowosc",
    "ulica",
    "kod_pocztowy",
    "liczba_pokoi",
    "kondygnacja",
    "construction_year",
    "energy_class",
    "data_pierwszej_oferty",
)

DEVELOPER_INFO_FIELDS = (
    "developer_name",
    "company_name",
    "nip",
    "phone",
    "email",
    "investment_name",
    "investment_address",
    "investment_city",
)


# ══════════════════════════════════════════════════════════════════════════════
# FORMAT SIGNATURES
# ══════════════════════════════════════════════════════════════════════════════

MINISTERIAL_SIGNATURES = tuple(
    sig.lower()
    for sig in (
        "Nr lokalu lub domu jednorodzinnego nadany przez dewelopera",
        "Cena m 2 powierzchni użytkowej lokalu mieszkalnego / domu jednorodzinnego [zł]",
        "Cena lokalu mieszkalnego lub domu jednorodzinnego będących przedmiotem umowy "
        "stanowiąca iloczyn ceny m2 oraz powierzchni [zł]",
        "Nazwa dewelopera",
        "Forma prawna dewelopera",
        "Rodzaj nieruchomości: lokal mieszkalny, dom jednorodzinny",
    )
)

VENDOR_SIGNATURES = tuple(
    sig.lower()
    for sig in (
        "Id nieruchomości",
        "Adres strony internetowej dewelopera",
        "Adres strony internetowej inwestycji",
        "Nr nieruchomości nadany przez dewelopera",
        "Inne świadczenia pieniężne",
        "Data od której obowiązuje cena za m2 nieruchomości",
        "Data od której obowiązuje cena nieruchomości",
    )
)

CUSTOM_SIGNATURES = (
    "nr lokalu", "numer lokalu", "apartment",
    "powierzchnia", "area", "metraz",
    "cena", "price", "cena całkowita",
    "status", "dostępność", "availability",
)
