"""
Phrases used by flash messages, emails and templates.

Keys are stable identifiers used in code; values are the default-locale
text, which is also the lookup key inside every locale catalog.
"""

PHRASES = {
    "HELLO_WORLD": "Hello world",
    "INVALID_EMAIL": "Email address was invalid.",
    "INVALID_PASSWORD": "Password was invalid.",
    "INVALID_TOKEN": "Invalid or expired token.",
    "LOGIN_REQUIRED": "Please log in to view the page you requested.",
    "LOGGED_IN": "You have successfully logged in.",
    "LOGGED_OUT": "You have successfully logged out.",
    "ALREADY_SIGNED_UP": "You have already signed up with %s.",
    "PASSWORD_RESET_SENT": "We have sent you an email with a link to reset your password.",
    "PASSWORD_RESET_SUCCESS": "You have successfully reset your password.",
    "PASSWORD_STRENGTH_INSUFFICIENT": "Password not strong enough.",
    "CONTACT_REQUEST_SENT": "Your message has been sent, we will reply as soon as possible.",
    "CONTACT_REQUEST_TOO_LONG": "Message must be less than %d characters.",
    "EMAIL_VERIFICATION_SUBJECT": "Verify your email address for %s",
}
