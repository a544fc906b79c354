import unittest

from application.services import LoginResult, OperationResult, RegisterResult
from domain.errors import SYSTEM_ERROR_REASON, AuthError, ErrorKind
from domain.models import AccountRole, SanitizedAccount
from interfaces.common import render_account, render_error, render_result, run_guarded
from interfaces.telegram.commands import (
    LOGIN_USAGE,
    REGISTER_USAGE,
    parse_login_args,
    parse_register_args,
)


class RunGuardedTests(unittest.TestCase):
    def test_passes_results_through(self):
        expected = RegisterResult(success=True, account_id=5)
        self.assertIs(run_guarded(lambda: expected, RegisterResult), expected)

    def test_expected_failures_are_not_rewritten(self):
        failure = LoginResult(
            success=False,
            error=AuthError(ErrorKind.AUTHENTICATION_FAILED, "nope"),
        )
        self.assertIs(run_guarded(lambda: failure, LoginResult), failure)

    def test_unexpected_exception_becomes_system_error(self):
        def boom():
            raise RuntimeError("connection to db-internal:5432 refused")

        with self.assertLogs("interfaces.common", level="ERROR"):
            result = run_guarded(boom, LoginResult)

        self.assertIsInstance(result, LoginResult)
        self.assertFalse(result.success)
        self.assertEqual(result.error.kind, ErrorKind.SYSTEM_ERROR)
        self.assertEqual(result.error.reason, SYSTEM_ERROR_REASON)
        self.assertNotIn("db-internal", result.error_message)
        self.assertIsNone(result.account)


class RenderingTests(unittest.TestCase):
    def test_render_error(self):
        text = render_error(AuthError(ErrorKind.INVALID_PARAMS, "Passwords do not match."))
        self.assertIn("Passwords do not match.", text)

    def test_render_result(self):
        self.assertEqual(render_result(OperationResult(success=True), "done"), "done")
        failed = OperationResult(success=False, error=AuthError(ErrorKind.SYSTEM_ERROR, "oops"))
        self.assertIn("oops", render_result(failed, "done"))

    def test_render_account(self):
        account = SanitizedAccount(
            id=7,
            account_name="ab_cd",
            planet_code="12",
            display_name="Ab Cd",
            role=AccountRole.ADMIN,
        )
        text = render_account(account)
        self.assertIn("ab_cd", text)
        self.assertIn("12", text)
        self.assertIn("Ab Cd", text)
        self.assertIn("admin", text)


class TelegramCommandParsingTests(unittest.TestCase):
    def test_parse_register(self):
        self.assertEqual(
            parse_register_args("/register ab_cd password1 password1 1"),
            ("ab_cd", "password1", "password1", "1"),
        )
        self.assertEqual(
            parse_register_args("/register@center_bot  ab_cd password1 password1 1 "),
            ("ab_cd", "password1", "password1", "1"),
        )

    def test_parse_register_wrong_arity(self):
        with self.assertRaises(ValueError) as ctx:
            parse_register_args("/register ab_cd password1")
        self.assertEqual(str(ctx.exception), REGISTER_USAGE)

    def test_parse_login(self):
        self.assertEqual(parse_login_args("/login ab_cd password1"), ("ab_cd", "password1"))

        with self.assertRaises(ValueError) as ctx:
            parse_login_args("/login")
        self.assertEqual(str(ctx.exception), LOGIN_USAGE)


if __name__ == "__main__":
    unittest.main()
