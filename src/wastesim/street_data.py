"""The street table of the collection district.

Rows are in collection order: trucks take the first free street of this list,
so the order decides which streets are visited first. A row with no
households is the drive back out of the street before it.
"""
from wastesim.streets import StreetRecord

HOUSEHOLDS_PER_TOWER_BLOCK = 12

STREET_TABLE: tuple[StreetRecord, ...] = (
    StreetRecord(12, 750, "Dlouha"),
    StreetRecord(2, 55, "Horni", 5),
    StreetRecord(5, 190, "Horni"),
    StreetRecord(0, 190, "Horni zpet"),
    StreetRecord(20, 400, "Horni"),
    StreetRecord(5, 71, "4473"),
    StreetRecord(0, 71, "4473 zpet"),
    StreetRecord(19, 290, "Horni"),
    StreetRecord(12, 180, "U Splavu", 5),
    StreetRecord(0, 180, "U Splavu zpet"),
    StreetRecord(6, 150, "Horni"),
    StreetRecord(6, 72, "Zahradni"),
    StreetRecord(0, 72, "Zahradni zpet"),
    StreetRecord(22, 550, "Horni"),
    StreetRecord(3, 74, "Dlouha"),
    StreetRecord(0, 74, "Dlouha zpet"),
    StreetRecord(11, 140, "Horni"),
    StreetRecord(10, 160, "44613"),
    StreetRecord(4, 28, "Oskava"),
    StreetRecord(10, 130, "Horni"),
    StreetRecord(3, 54, "Horni"),
    StreetRecord(7, 89, "Sokolska"),
    StreetRecord(0, 89, "Sokolska zpet"),
    StreetRecord(1, 60, "Horni", 5),
    StreetRecord(6, 140, "Oskava"),
    StreetRecord(0, 140, "Oskava zpet"),
    StreetRecord(9, 120, "Pravoslavna"),
    StreetRecord(0, 120, "Pravoslavna zpet"),
    StreetRecord(6, 300, "Dolni"),
    StreetRecord(2, 36, "Dolni"),
    StreetRecord(0, 36, "Dolni zpet"),
    StreetRecord(17, 290, "Dolni"),
    StreetRecord(4, 36, "Dolni"),
    StreetRecord(0, 36, "Dolni zpet"),
    StreetRecord(8, 68, "Dolni"),
    StreetRecord(21, 260, "Dolni", 8),
    StreetRecord(18, 300, "Polni"),
    StreetRecord(0, 250, "Dolni zpet"),
    StreetRecord(3, 77, "Dolni"),
    StreetRecord(3, 77, "Dolni"),
    StreetRecord(6, 79, "Dolni"),
    StreetRecord(0, 79, "Dolni zpet"),
    StreetRecord(3, 39, "Na Travniku"),
    StreetRecord(4, 54, "Na Travniku"),
    StreetRecord(0, 54, "Na Travniku zpet"),
    StreetRecord(2, 26, "Dolni"),
    StreetRecord(6, 110, "Delnicka"),
    StreetRecord(7, 280, "Delnicka"),
    StreetRecord(0, 110, "Delnicka zpet"),
    StreetRecord(4, 110, "Delnicka"),
    StreetRecord(11, 290, "Nadrazni", 7),
    StreetRecord(3, 81, "Tovarni"),
    StreetRecord(0, 81, "Tovarni zpet"),
    StreetRecord(4, 130, "Nadrazni"),
    StreetRecord(9, 150, "Tovarni"),
    StreetRecord(4, 110, "Nadrazni", 5),
    StreetRecord(0, 170, "Nadrazni zpet"),
    StreetRecord(5, 200, "Stepana Krejciho"),
    StreetRecord(0, 24, "Nadjezdova"),
    StreetRecord(8, 210, "Hybesova"),
    StreetRecord(2, 50, "Sidliste"),
    StreetRecord(11, 210, "Nadjezdova", 7),
    StreetRecord(0, 18, "Nadjezdova"),
    StreetRecord(6, 210, "Nadjezdova"),
    StreetRecord(2 * HOUSEHOLDS_PER_TOWER_BLOCK, 90, "Sidliste"),
    StreetRecord(2 * HOUSEHOLDS_PER_TOWER_BLOCK, 99, "Nadrazni"),
    StreetRecord(0, 99, "Nadrazni zpet"),
    StreetRecord(HOUSEHOLDS_PER_TOWER_BLOCK, 150, "Sidliste", 8),
    StreetRecord(3, 57, "Brezecka", 7),
    StreetRecord(22, 210, "Brezecka"),
    StreetRecord(5, 75, "Nadjezdova"),
    StreetRecord(7 + HOUSEHOLDS_PER_TOWER_BLOCK, 88, "Nadjezdova"),
    StreetRecord(9, 140, "Nadjezdova"),
    StreetRecord(0, 88, "Nadjezdova"),
    StreetRecord(0, 83, "Pod nadjezdem"),
    StreetRecord(2, 47, "Pod nadjezdem"),
    StreetRecord(10, 130, "Nova"),
    StreetRecord(25, 350, "Nova"),
    StreetRecord(8, 100, "Brezecka"),
)
