"""This script generates 16-bit PCM sine waves, either at a constant frequency
or sweeping linearly between two frequencies. The output is the raw little-endian
sample bytes that go into the data chunk of a WAVE file."""
import math
import numbers

import numpy as np
import torch

from ..utils.constants import SR, FULL_SCALE, SAMPLE_WIDTH


def _check_rate(sample_rate):
    if isinstance(sample_rate, bool) or not isinstance(sample_rate, numbers.Integral) or sample_rate <= 0:
        raise ValueError(f"sample rate must be a positive integer, got {sample_rate!r}")
    return int(sample_rate)

def _check_freq(name, freq):
    if isinstance(freq, bool) or not isinstance(freq, numbers.Real) or not math.isfinite(freq) or freq <= 0:
        raise ValueError(f"{name} must be a positive finite number of Hz, got {freq!r}")

def _check_count(sample_count):
    if isinstance(sample_count, bool) or not isinstance(sample_count, numbers.Integral) or sample_count < 0:
        raise ValueError(f"sample count must be a non-negative integer, got {sample_count!r}")


def _quantize(phase):
    # (1 - sin) * 2^15 lands in [0, 2^16], shift down so the wave is centred on 0
    x = torch.trunc((1 - torch.sin(phase)) * FULL_SCALE) - FULL_SCALE
    # sin == -1 would give +32768, one past the int16 range
    x = x.clamp(-FULL_SCALE, FULL_SCALE - 1).to(torch.int16)
    # "<i2" pins little-endian regardless of the host
    return x.numpy().astype("<i2").tobytes()


def generate_sine(frequency_hz, sample_count, sample_rate=SR):
    """Full-scale sine at `frequency_hz`, `sample_count` samples long.

    Frequencies at or above sample_rate / 2 are accepted and simply alias.
    """
    _check_freq("frequency", frequency_hz)
    _check_count(sample_count)
    sample_rate = _check_rate(sample_rate)
    if sample_count == 0:
        return b""

    n = torch.arange(sample_count, dtype=torch.float64) # sample index
    w = (frequency_hz / sample_rate) * 2 * math.pi # radians per sample
    return _quantize(w * n)


def sweep_frequencies(start_hz, end_hz, sample_count):
    # f_i moves from start_hz at i = 0 to end_hz at i = sample_count
    i = torch.arange(sample_count, dtype=torch.float64)
    if sample_count == 0:
        return i
    return start_hz + (end_hz - start_hz) * (i / sample_count)


def sweep_phase(start_hz, end_hz, sample_count, sample_rate=SR, continuous_phase=True):
    """Phase in radians of every sample of a linear sweep.

    continuous_phase=True accumulates 2*pi*f/sample_rate sample by sample, so the
    frequency heard at any point equals the interpolated frequency there.
    continuous_phase=False evaluates 2*pi*f_i*i/sample_rate afresh at each sample;
    that overshoots (the heard frequency ends near 2*end_hz - start_hz) and clicks
    on steep sweeps.
    """
    f = sweep_frequencies(start_hz, end_hz, sample_count)
    if continuous_phase:
        step = 2 * math.pi * f / sample_rate
        # exclusive running sum: phase_0 = 0, phase_i = sum of steps before i
        return torch.cumsum(step, dim=0) - step
    i = torch.arange(sample_count, dtype=torch.float64)
    return 2 * math.pi * f * i / sample_rate


def generate_sweep(start_hz, end_hz, sample_count, sample_rate=SR, continuous_phase=True):
    """Full-scale sine whose frequency moves linearly from start_hz to end_hz."""
    _check_freq("start frequency", start_hz)
    _check_freq("end frequency", end_hz)
    _check_count(sample_count)
    sample_rate = _check_rate(sample_rate)
    if sample_count == 0:
        return b""

    return _quantize(sweep_phase(start_hz, end_hz, sample_count, sample_rate, continuous_phase))


def pcm_to_samples(data):
    """Decode little-endian 16-bit PCM bytes into an int16 array."""
    if len(data) % SAMPLE_WIDTH != 0:
        raise ValueError(f"PCM buffer of {len(data)} bytes is not a whole number of 16-bit samples")
    return np.frombuffer(data, dtype="<i2").astype(np.int16)
