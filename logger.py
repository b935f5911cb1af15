# logger.py

# This will hold a reference to the active EpochManager instance.
_epoch_manager = None

def set_epoch_manager(em):
    """Sets the global epoch manager for the logger to use."""
    global _epoch_manager
    _epoch_manager = em

def format_prefix():
    """Returns the timestamp prefix for the next log line."""
    # Check if the epoch manager has been set and the first tree has been built.
    if _epoch_manager and _epoch_manager.epoch > 0:
        return f"[Epoch {_epoch_manager.epoch:06d}]"
    # For messages logged before the first rebuild.
    return "[Startup]"

def log(message):
    """Prints a message with an epoch stamp if available."""
    print(f"{format_prefix()} {message}")
