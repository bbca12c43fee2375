"""System-wide configuration constants."""

# Application process identifiers
GROUND_APID = 0
APP1_APID = 1

# Software bus
SBRO_SUBSCRIBERS_MAX_NO = 6
SBRO_QUEUE_NB = 2000
SBRO_PACKET_MAX_NB = 256

# Application 1 packet queue size in bytes
APP1_QUEUE_NB = SBRO_PACKET_MAX_NB * 4

# Scheduling of the processes inside one maestro period
MAESTRO_PERIOD_MS = 1000
SWBUS_WAIT_BEFORE_MS = 10
SWBUS_TIME_LENGTH_MS = 90
PROCESS1_WAIT_BEFORE_MS = 110
PROCESS1_TIME_LENGTH_MS = 100

# Number of consecutive slot overruns that triggers a reboot
CONSECUTIVE_OVERRUNS_LIMIT = 5

# Data link
DATALINK_ADDRESS = "127.0.0.1"
DATALINK_PORT = 4163
DATALINK_RECEIVE_QUEUE_NB = 2000
DATALINK_POLL_MS = 10

# Generic FIFO queue
QUEUE_ELEMENT_MAX_NO = 80

# Platform
IS_LITTLE_ENDIAN = True
UINT32_MAX = 4294967295