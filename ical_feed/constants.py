USER_AGENT = 'ical-feed/0.1'

BEGIN_EVENT = "BEGIN:VEVENT"
END_EVENT = "END:VEVENT"

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

DEFAULT_TIMEOUT = 30
DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 1
