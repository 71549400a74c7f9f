READ = "R"
WRITE = "W"

OPERATIONS = (READ, WRITE)


def check_operation(operation):
    """Return the operation unchanged, or raise ValueError for anything but R or W."""
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown op: {operation}")
    return operation
