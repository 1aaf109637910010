from enum import Enum


class SeatType(str, Enum):
    """座席タイプ"""

    WINDOW = "Window"
    AISLE = "Aisle"
    MIDDLE = "Middle"
    EXIT_ROW = "Exit Row"
