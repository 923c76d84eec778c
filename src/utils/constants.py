## AUDIO PARAMETERS
SR = 44100 # samples per second
DURATION = 2.0 # seconds
MIDDLE_C = 261.6256 # Hz

## PCM FORMAT
"""Only mono 16-bit integer PCM is written. Both the synthesizer and the container rely on these."""

CHANNELS = 1 # mono
BITS_PER_SAMPLE = 16
SAMPLE_WIDTH = BITS_PER_SAMPLE // 8 # bytes per sample

# format code in the fmt chunk, 1 = integer PCM (no compression)
AUDIO_FORMAT_PCM = 1

# full-scale amplitude for signed 16-bit: samples live in [-FULL_SCALE, FULL_SCALE - 1]
FULL_SCALE = 32768

## CONTAINER LAYOUT
HEADER_SIZE = 44 # bytes before the payload
FMT_CHUNK_SIZE = 16 # size of the PCM fmt chunk body
# ChunkSize excludes the ChunkID and ChunkSize fields themselves
CHUNK_SIZE_OFFSET = HEADER_SIZE - 8 # 36

# every size field is an unsigned 32-bit value
MAX_U32 = 0xFFFFFFFF
