import pygame

from depthfield.api.config import FieldConfig
from depthfield.input.debug_force import DEFAULT_BUTTONS, DebugForceInjector

SIZE = (800, 600)


def send(inj, kind, **attrs):
    inj.handle_pygame_event(pygame.event.Event(kind, **attrs), SIZE)


def test_disabled_without_debug():
    inj = DebugForceInjector(FieldConfig(debug=False))
    send(inj, pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 20))
    assert inj.emit_sources() == ()


def test_hold_move_release():
    inj = DebugForceInjector(FieldConfig(debug=True))
    send(inj, pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 20))
    (src,) = inj.emit_sources()
    radius, strength = DEFAULT_BUTTONS[1]
    assert (src.x, src.y, src.radius, src.strength) == (10.0, 20.0, radius, strength)

    send(inj, pygame.MOUSEMOTION, pos=(300, 200), rel=(0, 0), buttons=(1, 0, 0))
    (src,) = inj.emit_sources()
    assert (src.x, src.y) == (300.0, 200.0)

    send(inj, pygame.MOUSEBUTTONUP, button=1, pos=(300, 200))
    assert inj.emit_sources() == ()


def test_motion_without_button_emits_nothing():
    inj = DebugForceInjector(FieldConfig(debug=True))
    send(inj, pygame.MOUSEMOTION, pos=(30, 40), rel=(0, 0), buttons=(0, 0, 0))
    assert inj.emit_sources() == ()


def test_two_buttons_two_sources():
    inj = DebugForceInjector(FieldConfig(debug=True))
    send(inj, pygame.MOUSEBUTTONDOWN, button=1, pos=(50, 60))
    send(inj, pygame.MOUSEBUTTONDOWN, button=3, pos=(50, 60))
    radii = sorted(s.radius for s in inj.emit_sources())
    assert radii == sorted([DEFAULT_BUTTONS[1][0], DEFAULT_BUTTONS[3][0]])


def test_focus_loss_releases_everything():
    inj = DebugForceInjector(FieldConfig(debug=True))
    send(inj, pygame.MOUSEBUTTONDOWN, button=1, pos=(5, 5))
    send(inj, pygame.WINDOWFOCUSLOST)
    assert inj.emit_sources() == ()


def test_mirror_flips_x():
    inj = DebugForceInjector(FieldConfig(debug=True, mirror=True))
    send(inj, pygame.MOUSEBUTTONDOWN, button=3, pos=(0, 50))
    assert inj.emit_sources()[0].x == 799.0


def test_unmapped_button_ignored():
    inj = DebugForceInjector(FieldConfig(debug=True))
    send(inj, pygame.MOUSEBUTTONDOWN, button=2, pos=(5, 5))
    assert inj.emit_sources() == ()
