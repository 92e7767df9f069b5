"""Keyboard key codes and the helpers that map them to digits and characters."""

from __future__ import annotations

from enum import IntEnum


class Key(IntEnum):
    """Key codes understood by the game scenes."""

    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 9  # noqa: E741
    J = 10
    K = 11
    L = 12
    M = 13
    N = 14
    O = 15  # noqa: E741
    P = 16
    Q = 17
    R = 18
    S = 19
    T = 20
    U = 21
    V = 22
    W = 23
    X = 24
    Y = 25
    Z = 26
    DIGIT_0 = 27
    DIGIT_1 = 28
    DIGIT_2 = 29
    DIGIT_3 = 30
    DIGIT_4 = 31
    DIGIT_5 = 32
    DIGIT_6 = 33
    DIGIT_7 = 34
    DIGIT_8 = 35
    DIGIT_9 = 36
    ESCAPE = 59
    BACKSPACE = 63
    TAB = 64
    ENTER = 67
    SPACE = 75
    LEFT = 82
    RIGHT = 83
    UP = 84
    DOWN = 85
    LSHIFT = 215


def digit_value(key: int) -> int | None:
    """Return the digit a number key stands for, or None for any other key."""
    if Key.DIGIT_0 <= key <= Key.DIGIT_9:
        return int(key) - Key.DIGIT_0
    return None


def key_to_char(key: int) -> str | None:
    """Return the character typed by a digit, letter or space key, else None."""
    digit = digit_value(key)
    if digit is not None:
        return str(digit)
    if Key.A <= key <= Key.Z:
        return chr(ord("A") + int(key) - Key.A)
    if key == Key.SPACE:
        return " "
    return None