from enum import Enum


class TableNames(str, Enum):
    GROUPS = "groups"
    GUESTS = "guests"
