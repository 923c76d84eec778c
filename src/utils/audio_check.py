""" This script reads a written WAVE file back with soundfile, to make sure a
standard decoder accepts it, and plots the first samples of a waveform."""
import soundfile as sf
import matplotlib.pyplot as plt

from .constants import SR, MIDDLE_C, DURATION


def check_wav(path):
    """Read `path` with libsndfile and return (samples as int16, sample rate).

    Raises RuntimeError (soundfile's error) if libsndfile cannot read the file,
    and ValueError if it reads but is not a 16-bit PCM WAV.
    """
    info = sf.info(path)
    if info.format != "WAV":
        raise ValueError(f"expected a WAV file, got {info.format}")
    if info.subtype != "PCM_16":
        raise ValueError(f"expected 16-bit PCM, got {info.subtype}")
    samples, sr = sf.read(path, dtype="int16")
    return samples, sr


def plot_waveform(samples, sr=SR, n=500, title="Sine Wave", show=False):
    fig, ax = plt.subplots()
    ax.plot(samples[:n]) # first n samples (500 at 44.1 kHz is ~11 ms)
    ax.set_title(title)
    ax.set_xlabel(f"Sample Index ({sr} Hz)")
    ax.set_ylabel("Amplitude")
    if show:
        plt.show()
    return fig


def main():
    from ..cli.make_tone import make_tone

    make_tone("sine_test.wav", SR, MIDDLE_C, DURATION)
    samples, sr = check_wav("sine_test.wav")
    print(f"Read back {len(samples)} samples at {sr} Hz")
    plot_waveform(samples, sr, title="Middle C", show=True)

if __name__ == "__main__":
    main()
