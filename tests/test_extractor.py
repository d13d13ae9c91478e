from __future__ import annotations

import pytest

from mailotp.otp import OtpReader, extract_otp


@pytest.mark.parametrize(
    "subject, body, expected",
    [
        ("", "Your OTP is 123456", "123456"),
        ("", "OTP: 654321", "654321"),
        ("", "One-time password: 987654", "987654"),
        ("", "one-time code 112233", "112233"),
        ("", "Verification code: 445566", "445566"),
        ("", "Your verification code is 778899", "778899"),
        ("", "Security code: 111222", "111222"),
        ("", "Your security code is 333444", "333444"),
        ("", "Auth code: 555666", "555666"),
        ("", "Authentication code: 777888", "777888"),
        ("", "G-123456 is your verification code", "123456"),
        ("G-789012", "", "789012"),
        ("", "Your Google 2FA code is 345678", "345678"),
        ("", "Microsoft security code: 901234", "901234"),
        ("", "Microsoft verification code is 567890", "567890"),
        ("", "GitHub device verification code: 123789", "123789"),
        ("", "Your GitHub verification code is 456012", "456012"),
        ("", "Amazon OTP: 789345", "789345"),
        ("", "Your Amazon verification code is 012678", "012678"),
        ("", "Your 2FA code is 345901", "345901"),
        ("", "Two-factor code: 678234", "678234"),
        ("", "Sign in code: 901567", "901567"),
        ("", "Your login code is 234890", "234890"),
        ("", "PIN code: 1234", "1234"),
        ("", "PIN: 123456", "123456"),
        ("", "Your passcode: 654321", "654321"),
        ("", "Enter: 987654", "987654"),
        ("", "Use: 321654", "321654"),
        ("", "Code to complete: 654987", "654987"),
        ("", "Confirm with: 789456", "789456"),
        ("", "123456 is your code", "123456"),
        ("", "654321 is your OTP", "654321"),
        ("", "987654 is your one-time code", "987654"),
        ("", "<span>123456</span>", "123456"),
        ("", 'Your OTP is <div class="code">654321</div>', "654321"),
        ("", "Verification code: <strong>987654</strong>", "987654"),
        ("Your OTP", "Your verification code is 123456. Do not share.", "123456"),
        ("", "Order #12345. OTP: 654321. Thank you.", "654321"),
        ("", "Your OTP code:\n123456\nThank you", "123456"),
        ("", "Your OTP is 1234", "1234"),
        ("", "PIN: 5678", "5678"),
        ("", "Security code: 12345678", "12345678"),
        ("", "Your OTP: 87654321", "87654321"),
        ("", "otp: 123456", "123456"),
        ("", "VeRiFiCaTiOn code: 111222", "111222"),
        ("", "OTP   :   333444", "333444"),
        ("", "OTP:\t555666", "555666"),
        ("Your one time password", "Code: 123456", "123456"),
        ("Your code is 654321", "", "654321"),
        ("", "FB-48213 is your Facebook confirmation code", "48213"),
    ],
)
def test_extracts_code(subject, body, expected):
    assert extract_otp(subject, body) == expected


@pytest.mark.parametrize(
    "subject, body, expected",
    [
        (
            "Your Google verification code",
            "G-123456 is your Google verification code. Don't share this code with anyone.",
            "123456",
        ),
        (
            "Microsoft account security code",
            "Use 654321 as your Microsoft account security code. If you didn't request this code, "
            "you can ignore this email.",
            "654321",
        ),
        (
            "[GitHub] Your verification code",
            "Your GitHub verification code is 789012. Enter this code to complete your sign in.",
            "789012",
        ),
        (
            "Amazon: Your verification code",
            "Your Amazon verification code is 345678. Don't share this code with anyone.",
            "345678",
        ),
        (
            "Your login verification code",
            "Your verification code is 901234. This code expires in 10 minutes.",
            "901234",
        ),
        (
            "Slack confirmation code",
            "Your Slack confirmation code is 567890. Enter it in the app to verify your identity.",
            "567890",
        ),
        (
            "Your verification code",
            "Your Discord verification code is 123789. This code will expire in 10 minutes.",
            "123789",
        ),
        (
            "One-time password for your transaction",
            "Your OTP for transaction is 456012. Never share this with anyone. "
            "Bank will never ask for this code.",
            "456012",
        ),
        (
            "Your verification code",
            "<p>Your verification code is:</p><div style='font-size: 24px; font-weight: bold;'>789345</div>",
            "789345",
        ),
        (
            "Verify your account",
            "<html><body><p>Your code: <span class='otp'>012678</span></p></body></html>",
            "012678",
        ),
        ("Your verification code", "Your verification code is 482913", "482913"),
    ],
)
def test_real_world_emails(subject, body, expected):
    assert extract_otp(subject, body) == expected


@pytest.mark.parametrize(
    "subject, body",
    [
        ("", "Hello, how are you today?"),
        ("", "Your order #1234567890 has shipped"),
        ("", "Copyright 2024 Company Inc."),
        ("", "Year 2023 was great"),
        ("", "Since 1999 we have been..."),
        ("", "Meeting at 3pm. Call 555-1234 for details."),
        ("", "Best regards, Call us: 1234567890"),
        ("Meeting notes", "Please review section 4 of the attached document"),
        (
            "Your order #12345678 has been confirmed",
            "Thank you for your order #12345678. Your package will arrive in 3-5 business days.",
        ),
        (
            "Weekly Newsletter - December 2024",
            "This week in December 2024: Top 10 products of the year. Call us at 555-123-4567.",
        ),
        (
            "Invoice #INV-2024-0001",
            "Invoice Amount: $1234.56. Reference: 20241215. Please pay within 30 days.",
        ),
        (
            "Your package is on the way",
            "Tracking number: 1Z999AA10123456784. Expected delivery: December 20, 2024.",
        ),
        ("Meeting at 10:00 AM", "Join us for a meeting at 10:00 AM in Conference Room 2024."),
        (
            "Support Ticket #123456",
            "Your support ticket #123456 has been received. Our team will respond within 24 hours.",
        ),
        ("Your flight is booked", "Confirmation: XYZ123. Flight AA1234. Departing Dec 25, 2024 at 14:30."),
        ("Your monthly statement", "Account ending in 1234. Balance: $5678.90. Transactions: 12."),
        ("Copyright notice", "© 2023 Example Corp"),
        ("", "OTP charges: $1500 apply"),
        ("", "Your OTP fee is $1234.56"),
        ("", "Verification of your account completed. Room 4021 booked."),
        ("", "Verification pending for booking #48213"),
        ("Our story", "<p>Founded in</p><strong>1998</strong><p>Offer valid for new members</p>"),
    ],
)
def test_false_positives(subject, body):
    assert extract_otp(subject, body) == ""


def test_hyphenated_code_is_normalized():
    assert extract_otp("WhatsApp code", "Your WhatsApp code is 123-456") == "123456"


def test_space_separated_groups_are_normalized():
    assert extract_otp("", "Your verification code is 482 913") == "482913"


def test_year_accepted_with_otp_context():
    body = "Your one-time code is 2024, don't share it, expires in 10 minutes"
    assert extract_otp("", body) == "2024"


def test_year_rejected_next_to_copyright_even_with_keyword():
    assert extract_otp("Your login", "Your OTP is 2023. © 2023 Example Corp") == ""


def test_year_rejected_without_context():
    assert extract_otp("", "PIN: 1999") == ""


def test_rejected_candidate_falls_through_to_later_rule():
    # "1999" fails the year check; the markup rule still finds the real code.
    body = "PIN: 1999 <strong>482913</strong>"
    assert extract_otp("", body) == "482913"


def test_unicode_digits_are_not_codes():
    assert extract_otp("", "OTP: ١٢٣٤٥٦") == ""


def test_code_split_across_subject_and_body_join():
    # Subject and body are joined with a space, so a trailing keyword in the
    # subject pairs with leading digits of the body.
    assert extract_otp("Your OTP is", "836104") == "836104"


def test_reader_accepts_custom_rules():
    from mailotp.otp.patterns import PATTERN_RULES

    reader = OtpReader(rules=[rule for rule in PATTERN_RULES if rule.name != "markup"])
    assert reader.parse("", "<span>123456</span>") is None
    assert OtpReader().parse("", "<span>123456</span>") == "123456"


def test_code_after_an_amount_is_still_found():
    assert extract_otp("", "Payment of $1500 pending. Your OTP is 482913") == "482913"


def test_decimal_amount_is_not_a_code():
    assert extract_otp("", "Verification charge 2500.00 refunded") == ""
