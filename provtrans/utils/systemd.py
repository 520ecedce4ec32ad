"""systemd unit naming helpers."""

_ALLOWED = frozenset(
    ":_.0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
)


def unit_name_path_escape(path: str) -> str:
    """
    Escape a filesystem path for use in a unit name (systemd-escape --path)

    Runs of "/" collapse to a single "-", leading and trailing slashes are
    dropped, and any byte outside [A-Za-z0-9:_.] (or a leading ".") becomes
    a \\xNN escape. The root path escapes to "-".
    """
    out = []
    in_slashes = False
    start = True
    for c in path.encode("utf-8"):
        ch = chr(c)
        if ch == "/":
            in_slashes = True
            continue
        if in_slashes:
            if not start:
                out.append("-")
            in_slashes = False
        if (start and ch == ".") or ch not in _ALLOWED:
            out.append(f"\\x{c:02x}")
        else:
            out.append(ch)
        start = False
    if not out:
        return "-"
    return "".join(out)


def mount_unit_name(path: str) -> str:
    """Name of the mount unit for a mount point, e.g. /var/lib -> var-lib.mount"""
    return unit_name_path_escape(path) + ".mount"
