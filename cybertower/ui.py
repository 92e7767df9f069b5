"""Clickable buttons, price-gated buttons and value sliders."""

from __future__ import annotations

from typing import Callable

OPAQUE_TINT = (255, 255, 255, 255)
DISABLED_TINT = (0, 0, 0, 160)


class Button:
    """A rectangular area that calls back when clicked with the left button."""

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        on_click: Callable[[], None] | None = None,
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)
        self.anchor_x = 0.0
        self.anchor_y = 0.0
        self.on_click = on_click
        self.enabled = True
        self.mouse_in = False

    def contains(self, mx: float, my: float) -> bool:
        """Whether the point lies inside the button's area."""
        left = self.x - self.anchor_x * self.width
        top = self.y - self.anchor_y * self.height
        return left <= mx < left + self.width and top <= my < top + self.height

    @property
    def highlighted(self) -> bool:
        """Whether the hover image would be shown."""
        return self.mouse_in and self.enabled

    def on_mouse_move(self, mx: float, my: float) -> None:
        self.mouse_in = self.contains(mx, my)

    def on_mouse_down(self, button: int, mx: float, my: float) -> bool:
        """Fire the callback on a left click over an enabled button; report whether it fired."""
        if (button & 1) and self.mouse_in and self.enabled:
            if self.on_click is not None:
                self.on_click()
            return True
        return False


class PriceButton(Button):
    """A button that is enabled only while the player can afford its price."""

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        price: int,
        on_click: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(x, y, width, height, on_click)
        self.price = price
        self.tint = OPAQUE_TINT

    def refresh(self, money: int) -> bool:
        """Enable or grey out the button for the given money; return whether enabled."""
        self.enabled = money >= self.price
        self.tint = OPAQUE_TINT if self.enabled else DISABLED_TINT
        return self.enabled


class Slider(Button):
    """A knob dragged along a horizontal bar, giving a value in [0, 1]."""

    knob_size = 16.0
    minimum = 0.0
    maximum = 1.0

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        on_value_changed: Callable[[float], None] | None = None,
    ) -> None:
        if width <= 0:
            raise ValueError("slider width must be positive")
        super().__init__(x + width, y + height / 2, self.knob_size, self.knob_size)
        self.anchor_x = 0.5
        self.anchor_y = 0.5
        self.bar_x = float(x)
        self.bar_y = float(y)
        self.bar_width = float(width)
        self.bar_height = float(height)
        self.on_value_changed = on_value_changed
        self.value = 0.0
        self.down = False

    def set_value(self, value: float) -> float:
        """Clamp and store the value, move the knob and notify; return the stored value."""
        value = min(max(float(value), self.minimum), self.maximum)
        self.x = self.bar_x + value * self.bar_width
        self.value = value
        if self.on_value_changed is not None:
            self.on_value_changed(value)
        return value

    def on_mouse_down(self, button: int, mx: float, my: float) -> bool:
        if (button & 1) and self.mouse_in:
            self.down = True
        return self.down

    def on_mouse_up(self, button: int, mx: float, my: float) -> None:
        self.down = False

    def on_mouse_move(self, mx: float, my: float) -> None:
        super().on_mouse_move(mx, my)
        if self.down:
            clamped = min(max(float(mx), self.bar_x), self.bar_x + self.bar_width)
            self.set_value((clamped - self.bar_x) / self.bar_width)