"""
sound_manager.py
----------------
Synthesized sound effects played through pygame.mixer.

The game ships no audio files; each effect is a short oscillator sweep
rendered into a 16-bit mono buffer at startup. Playback is silenced
while the player has muted the game or while a rewarded ad is in
flight.
"""

import math
from array import array

import pygame

from pixel_commando.core.debug.debug_logger import DebugLogger
from pixel_commando.core.services.event_manager import (
    ShotFiredEvent,
    PlayerJumpedEvent,
    PlayerDamagedEvent,
    EnemyKilledEvent,
    BossDefeatedEvent,
    LevelCompletedEvent,
)


SAMPLE_RATE = 22050
MASTER_VOLUME = 0.9

# name -> ((start_offset, freq, duration, wave, volume, end_freq), ...)
TONES = {
    "player_shoot": ((0.0, 680, 0.08, "square", 0.06, 360),),
    "enemy_shoot": ((0.0, 240, 0.09, "sawtooth", 0.05, 170),),
    "hit": ((0.0, 150, 0.12, "triangle", 0.07, 85),),
    "jump": ((0.0, 260, 0.09, "square", 0.05, 430),),
    "level_clear": (
        (0.0, 520, 0.08, "triangle", 0.06, 620),
        (0.09, 700, 0.12, "triangle", 0.06, 860),
    ),
    "unmute": ((0.0, 740, 0.05, "triangle", 0.04, 880),),
}


# ===========================================================
# Synthesis
# ===========================================================

def _oscillator(wave: str, phase: float) -> float:
    """Sample a unit waveform at phase (in cycles)."""
    p = phase % 1.0
    if wave == "square":
        return 1.0 if p < 0.5 else -1.0
    if wave == "sawtooth":
        return 2.0 * p - 1.0
    if wave == "triangle":
        return 4.0 * p - 1.0 if p < 0.5 else 3.0 - 4.0 * p
    return math.sin(2 * math.pi * p)


def _envelope(t: float, duration: float) -> float:
    """Fast 10 ms attack then exponential decay to silence."""
    attack = 0.01
    if t < attack:
        return t / attack
    return math.exp(-6.0 * (t - attack) / max(duration - attack, 1e-6))


def synthesize(parts, sample_rate: int = SAMPLE_RATE) -> array:
    """
    Render one or more tone parts into signed 16-bit samples.

    Args:
        parts: Sequence of (offset, freq, duration, wave, volume, end_freq)
        sample_rate: Output rate in Hz

    Returns:
        array('h') of mixed samples
    """
    length = max(offset + duration for offset, _, duration, _, _, _ in parts)
    mix = [0.0] * int(length * sample_rate + 1)

    for offset, freq, duration, wave, volume, end_freq in parts:
        start = int(offset * sample_rate)
        count = int(duration * sample_rate)
        phase = 0.0
        for i in range(count):
            t = i / sample_rate
            f = freq + (end_freq - freq) * (t / duration)
            mix[start + i] += volume * _envelope(t, duration) * _oscillator(wave, phase)
            phase += f / sample_rate

    peak = 32767 * MASTER_VOLUME * 8
    return array("h", (max(-32767, min(32767, int(s * peak))) for s in mix))


# ===========================================================
# Sound Manager
# ===========================================================

class SoundManager:
    """Owns the effect bank plus the mute and ad-ducking state."""

    def __init__(self):
        self.bfx = {}
        self.muted = False
        self.ad_active = False
        self.enabled = self._init_mixer()
        if self.enabled:
            self.load_assets()
        DebugLogger.init_entry("SoundManager" + ("" if self.enabled else " [silent]"))

    def _init_mixer(self) -> bool:
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as e:
            DebugLogger.warn(f"Audio unavailable: {e}", category="audio")
            return False
        return True

    def load_assets(self):
        for name, parts in TONES.items():
            try:
                sound = pygame.mixer.Sound(buffer=synthesize(parts).tobytes())
            except pygame.error as e:
                DebugLogger.warn(f"Could not build sound '{name}': {e}", category="audio")
                continue
            sound.set_volume(self.effective_volume)
            self.bfx[name] = sound

    # ===========================================================
    # Volume State
    # ===========================================================

    @property
    def effective_volume(self) -> float:
        """Zero while muted or while an ad is in flight."""
        if self.muted or self.ad_active:
            return 0.0
        return MASTER_VOLUME

    def set_ad_active(self, active: bool):
        if self.ad_active == active:
            return
        self.ad_active = active
        DebugLogger.state(f"Ad audio ducking {'on' if active else 'off'}", category="audio")
        self._apply_volume()

    def toggle_mute(self) -> bool:
        """Flip mute; returns the new muted flag."""
        self.muted = not self.muted
        DebugLogger.action(f"Audio {'muted' if self.muted else 'unmuted'}", category="audio")
        self._apply_volume()
        if not self.muted:
            self.play_bfx("unmute")
        return self.muted

    def _apply_volume(self):
        volume = self.effective_volume
        for sound in self.bfx.values():
            sound.set_volume(volume)

    # ===========================================================
    # Playback
    # ===========================================================

    def play_bfx(self, name: str) -> bool:
        """Play an effect by name. Missing effects and silenced audio are skipped."""
        if self.effective_volume <= 0:
            return False
        sound = self.bfx.get(name)
        if sound is None:
            return False
        sound.play()
        return True

    def subscribe(self, events):
        """Hook effect playback onto gameplay events."""
        events.subscribe(ShotFiredEvent, self._on_shot)
        events.subscribe(PlayerJumpedEvent, self._on_jump)
        events.subscribe(PlayerDamagedEvent, self._on_hit)
        events.subscribe(EnemyKilledEvent, self._on_hit)
        events.subscribe(BossDefeatedEvent, self._on_hit)
        events.subscribe(LevelCompletedEvent, self._on_level_clear)

    def _on_shot(self, event):
        self.play_bfx("player_shoot" if event.shooter == "player" else "enemy_shoot")

    def _on_jump(self, event):
        self.play_bfx("jump")

    def _on_hit(self, event):
        self.play_bfx("hit")

    def _on_level_clear(self, event):
        self.play_bfx("level_clear")
