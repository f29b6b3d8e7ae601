"""Expose Shelly covers as HomeKit doors, windows or window coverings."""

from __future__ import annotations

from enum import Enum
import logging

from pyhap.const import CATEGORY_DOOR, CATEGORY_WINDOW, CATEGORY_WINDOW_COVERING

from .ability import Ability, ability_name
from .const import CHAR_CURRENT_POSITION, CHAR_POSITION_STATE, CHAR_TARGET_POSITION
from .projection import CoverState, project_cover
from .sdk.const import (
    EVENT_CURRENT_POS_CHANGE,
    EVENT_STATE_CHANGE,
    EVENT_TARGET_POS_CHANGE,
)
from .sdk.cover import Cover

_LOGGER = logging.getLogger(__name__)


class CoverType(Enum):
    """HomeKit service a cover is exposed as."""

    DOOR = "door"
    WINDOW = "window"
    WINDOW_COVERING = "window_covering"


COVER_LABELS = {
    CoverType.DOOR: "Door",
    CoverType.WINDOW: "Window",
    CoverType.WINDOW_COVERING: "Window Covering",
}

COVER_SERVICES = {
    CoverType.DOOR: ("Door", CATEGORY_DOOR),
    CoverType.WINDOW: ("Window", CATEGORY_WINDOW),
    CoverType.WINDOW_COVERING: ("WindowCovering", CATEGORY_WINDOW_COVERING),
}


class CoverAbility(Ability):
    """Mirrors a cover onto PositionState, CurrentPosition and TargetPosition."""

    def __init__(
        self,
        component: Cover,
        cover_type: CoverType = CoverType.WINDOW,
        single: bool = False,
    ) -> None:
        """Initialize the cover ability."""
        super().__init__(
            component,
            ability_name(COVER_LABELS[cover_type], component, single),
            f"{cover_type.value}-{component.id}",
        )
        self.component: Cover = component
        self.cover_type = cover_type
        self.service_name, self.category = COVER_SERVICES[cover_type]

        self._handlers = {
            EVENT_STATE_CHANGE: self._handle_state_change,
            EVENT_CURRENT_POS_CHANGE: self._handle_current_pos_change,
            EVENT_TARGET_POS_CHANGE: self._handle_target_pos_change,
        }

    @property
    def state(self) -> CoverState:
        """Return the HomeKit view of the cover."""
        return project_cover(self.component)

    def initialize(self) -> None:
        """Seed the service and start listening."""
        # Positions are only reported once the cover has been calibrated
        if not self.component.pos_control:
            _LOGGER.warning(
                "%s: only calibrated covers are supported (%s of device %s)",
                self.name,
                self.component.key,
                self.component.device_id,
            )
            return

        state = self.state
        self._seed(
            {
                CHAR_POSITION_STATE: int(state.position_state),
                CHAR_CURRENT_POSITION: state.current_position,
                CHAR_TARGET_POSITION: state.target_position,
            }
        )

        self._on_command(
            CHAR_TARGET_POSITION,
            "target position",
            self.component.go_to_position,
            lambda: self.component.target_pos,
        )

        self._listen(self._handlers)

    def update_states(self) -> None:
        """Push position state, target and current position together.

        The device does not report one movement in a single notification;
        pushing only the changed value leaves HomeKit showing a mix of old
        and new values.
        """
        state = self.state
        self._push(
            {
                CHAR_POSITION_STATE: int(state.position_state),
                CHAR_TARGET_POSITION: state.target_position,
                CHAR_CURRENT_POSITION: state.current_position,
            }
        )

    def _handle_state_change(self, *_: object) -> None:
        state = self.state
        _LOGGER.debug(
            "%s: state changed to %s (target %s, current %s)",
            self.name,
            state.position_state.name,
            state.target_position,
            state.current_position,
        )
        self.update_states()

    def _handle_current_pos_change(self, *_: object) -> None:
        state = self.state
        _LOGGER.debug(
            "%s: position changed to %s (target %s, state %s)",
            self.name,
            state.current_position,
            state.target_position,
            state.position_state.name,
        )
        self.update_states()

        # Moving the cover with a physical switch never updates target_pos;
        # HomeKit would wait for the stale target forever.
        self._push({CHAR_TARGET_POSITION: state.current_position})

    def _handle_target_pos_change(self, *_: object) -> None:
        state = self.state
        _LOGGER.debug(
            "%s: target position changed to %s (current %s, state %s)",
            self.name,
            state.target_position,
            state.current_position,
            state.position_state.name,
        )
        self.update_states()
