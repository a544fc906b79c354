from __future__ import annotations

REGISTER_USAGE = "Usage: /register <account> <password> <confirm_password> <planet_code>"
LOGIN_USAGE = "Usage: /login <account> <password>"


def _command_args(text: str) -> list[str]:
    # Drop the leading "/command" (possibly "/command@botname").
    return text.split()[1:]


def parse_register_args(text: str) -> tuple[str, str, str, str]:
    """
    Parse a register command.

    Format: /register {account} {password} {confirm_password} {planet_code}
    """

    args = _command_args(text)
    if len(args) != 4:
        raise ValueError(REGISTER_USAGE)

    account_name, password, confirm_password, planet_code = args
    return account_name, password, confirm_password, planet_code


def parse_login_args(text: str) -> tuple[str, str]:
    """
    Parse a login command.

    Format: /login {account} {password}
    """

    args = _command_args(text)
    if len(args) != 2:
        raise ValueError(LOGIN_USAGE)

    account_name, password = args
    return account_name, password
