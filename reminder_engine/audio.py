"""Synchronous WAV playback for alert sounds."""

from __future__ import annotations

import logging
import wave
from pathlib import Path
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

_SAMPLE_DTYPES = {1: np.uint8, 2: np.int16, 4: np.int32}


def load_wav(path: str | Path) -> tuple[np.ndarray, int]:
    """Read a PCM WAV file into float32 frames in [-1, 1] and its sample rate."""

    with wave.open(str(path), "rb") as wf:
        sr = wf.getframerate()
        width = wf.getsampwidth()
        channels = wf.getnchannels()
        data = wf.readframes(wf.getnframes())

    dtype = _SAMPLE_DTYPES.get(width)
    if dtype is None:
        raise ValueError(f"Unsupported sample width {width} in {path}")

    pcm = np.frombuffer(data, dtype=dtype).astype(np.float32)
    if dtype is np.uint8:
        pcm = (pcm - 128.0) / 128.0
    else:
        pcm = pcm / float(np.iinfo(dtype).max + 1)
    return pcm.reshape(-1, channels), int(sr)


class WavPlayer:
    """Play a sound file and block until it finishes.

    Relative sound references are resolved against ``sound_dir``.
    """

    def __init__(self, sound_dir: Optional[str | Path] = None, device: Optional[int | str] = None) -> None:
        self.sound_dir = Path(sound_dir) if sound_dir else None
        self.device = device

    def resolve(self, sound_ref: str) -> Optional[Path]:
        if not sound_ref:
            return None
        path = Path(sound_ref).expanduser()
        if not path.is_absolute() and self.sound_dir is not None:
            path = self.sound_dir / path
        return path if path.is_file() else None

    def play(self, sound_ref: str) -> bool:
        path = self.resolve(sound_ref)
        if path is None:
            logger.warning("Sound file not found: %s", sound_ref)
            return False

        try:
            frames, sr = load_wav(path)
        except (wave.Error, EOFError, ValueError, OSError) as exc:
            logger.warning("Cannot read sound file %s: %s", path, exc)
            return False

        try:
            import sounddevice as sd

            sd.play(frames, samplerate=sr, device=self.device, blocking=True)
        except (ImportError, OSError) as exc:
            logger.warning("Audio output unavailable: %s", exc)
            return False
        except Exception as exc:
            logger.exception("Audio playback failed: %s", exc)
            return False
        return True
