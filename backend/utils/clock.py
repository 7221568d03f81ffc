from datetime import datetime, timezone


# Naive UTC timestamps: SQLite drops tzinfo on write, so every stored datetime is UTC without offset
def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
