"""Localized, display-safe messages for each error kind.

Indonesian ("id") is the application's primary locale; English ("en") is
kept for operators and logs.
"""

from __future__ import annotations

from .codes import ErrorKind
from .models import ClassifiedError

DEFAULT_LOCALE = "id"

MESSAGE_TEMPLATES: dict[str, dict[ErrorKind, str]] = {
    "id": {
        ErrorKind.NETWORK_ERROR: "Tidak dapat terhubung ke server. Periksa koneksi internet Anda.",
        ErrorKind.TIMEOUT_ERROR: "Permintaan timeout. Silakan coba lagi.",
        ErrorKind.CORS_ERROR: "Permintaan cross-origin diblokir. Silakan refresh halaman.",
        ErrorKind.VALIDATION_ERROR: "Data yang dimasukkan tidak valid.",
        ErrorKind.AUTHENTICATION_ERROR: "Sesi Anda telah berakhir. Silakan login kembali.",
        ErrorKind.AUTHORIZATION_ERROR: "Anda tidak memiliki izin untuk melakukan tindakan ini.",
        ErrorKind.NOT_FOUND_ERROR: "Data yang diminta tidak ditemukan.",
        ErrorKind.SERVER_ERROR: "Terjadi kesalahan server. Silakan coba lagi nanti.",
        ErrorKind.API_ERROR: "Permintaan ke server gagal.",
        ErrorKind.UNKNOWN_ERROR: "Terjadi kesalahan yang tidak terduga.",
    },
    "en": {
        ErrorKind.NETWORK_ERROR: "Network connection failed. Please check your internet connection.",
        ErrorKind.TIMEOUT_ERROR: "Request timeout. Please try again.",
        ErrorKind.CORS_ERROR: "Cross-origin request blocked. Please refresh the page.",
        ErrorKind.VALIDATION_ERROR: "The submitted data is invalid.",
        ErrorKind.AUTHENTICATION_ERROR: "Authentication required. Please log in.",
        ErrorKind.AUTHORIZATION_ERROR: "Access denied. You do not have permission to perform this action.",
        ErrorKind.NOT_FOUND_ERROR: "Resource not found.",
        ErrorKind.SERVER_ERROR: "Server error. Please try again later.",
        ErrorKind.API_ERROR: "API request failed.",
        ErrorKind.UNKNOWN_ERROR: "An unexpected error occurred.",
    },
}


def template_for(kind: ErrorKind, locale: str = DEFAULT_LOCALE) -> str:
    """Return the localized template for a kind, falling back to Indonesian."""
    templates = MESSAGE_TEMPLATES.get(locale, MESSAGE_TEMPLATES[DEFAULT_LOCALE])
    return templates[kind]


def resolve_message(kind: ErrorKind, supplied: str | None, locale: str = DEFAULT_LOCALE) -> str:
    """Choose the message stored on a freshly classified error.

    A server or client supplied message is only honoured for kinds whose
    message is meant to reach the user verbatim (validation and generic API
    failures). Every other kind gets its template so backend internals never
    leak into the UI.
    """
    if kind.uses_server_message and supplied and supplied.strip():
        return supplied
    return template_for(kind, locale)


def get_error_message(error: ClassifiedError, locale: str = DEFAULT_LOCALE) -> str:
    """Return the display-safe message for a classified error."""
    return resolve_message(error.kind, error.message, locale)
