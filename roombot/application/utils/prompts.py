"""
Localized reply texts for the booking conversation.

All texts use Telegram's legacy Markdown: *bold* and _italic_.
"""

from __future__ import annotations

from datetime import date

DEFAULT_LANGUAGE = "id"

_WEEKDAYS = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "id": ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"),
}

_MONTHS = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "id": (
        "Januari", "Februari", "Maret", "April", "Mei", "Juni",
        "Juli", "Agustus", "September", "Oktober", "November", "Desember",
    ),
}

_TEXTS: dict[str, dict[str, str]] = {
    "en": {
        "welcome": "🏢 *Welcome to the Meeting Room Booking System*\n\nPlease choose the date of your meeting.",
        "choose_date_button": "📅 Choose Date",
        "choose_date": "📅 *Choose the meeting date:*",
        "choose_start": "📅 Date: *{date}*\n\n⏰ *Choose the start time:*",
        "choose_end": "📅 Date: *{date}*\n⏰ Start: *{start}*\n\n⏰ *Choose the end time:*",
        "end_button": "{time} (Duration: {hours} h)",
        "availability_header": "📊 *Room Availability*\n\n📅 Date: *{date}*\n⏰ Time: *{window}*\n⏱️ Duration: *{hours} h*\n",
        "room_available": "✅ Available - *{room}*",
        "room_occupied": "❌ Booked - *{room}*",
        "availability_footer": "💡 _Tap an available room to book it_",
        "no_rooms": "😔 _No room is free for this time. Type /start to pick another time._",
        "book_button": "📍 Book {room}",
        "ask_name": "✏️ Please enter your *Name*:",
        "ask_department": "🏢 Please enter your *Department*:",
        "ask_agenda": "📋 Please enter the meeting *Agenda*:",
        "confirmation": (
            "✅ *Booking Confirmed!*\n\n"
            "📅 Date: *{date}*\n"
            "🏢 Room: *{room}*\n"
            "⏰ Time: *{window}*\n"
            "⏱️ Duration: *{hours} h*\n"
            "👤 Name: *{name}*\n"
            "🏢 Department: *{department}*\n"
            "📋 Agenda: *{agenda}*\n\n"
            "Thank you! 🙏"
        ),
        "booking_failed": "❌ Sorry, the booking could not be created. Type /start to try again. Detail: {detail}",
        "session_expired": "Your session has ended. Type /start to begin again.",
        "processing_error": "❌ Something went wrong while processing your request. Please try again.",
        "cancelled": "Booking cancelled. Type /start to begin again.",
        "help": (
            "🏢 *Meeting Room Booking*\n\n"
            "/start - book a meeting room\n"
            "/cancel - cancel the current booking\n"
            "/help - show this message"
        ),
        "event_description": "Name: {name}\nDepartment: {department}\nAgenda: {agenda}\nContact: {contact}",
        "create_failed_detail": "Failed to create booking: {message}",
        "room_taken_detail": "{room} is no longer available for this time",
    },
    "id": {
        "welcome": "🏢 *Selamat datang di Sistem Booking Ruangan Meeting*\n\nSilakan pilih tanggal meeting Anda.",
        "choose_date_button": "📅 Pilih Tanggal",
        "choose_date": "📅 *Pilih tanggal meeting:*",
        "choose_start": "📅 Tanggal: *{date}*\n\n⏰ *Pilih waktu mulai meeting:*",
        "choose_end": "📅 Tanggal: *{date}*\n⏰ Mulai: *{start}*\n\n⏰ *Pilih waktu selesai meeting:*",
        "end_button": "{time} (Durasi: {hours} jam)",
        "availability_header": "📊 *Ketersediaan Ruangan*\n\n📅 Tanggal: *{date}*\n⏰ Waktu: *{window}*\n⏱️ Durasi: *{hours} jam*\n",
        "room_available": "✅ Tersedia - *{room}*",
        "room_occupied": "❌ Terisi - *{room}*",
        "availability_footer": "💡 _Tap ruangan yang tersedia untuk booking_",
        "no_rooms": "😔 _Tidak ada ruangan kosong pada waktu ini. Ketik /start untuk memilih waktu lain._",
        "book_button": "📍 Book {room}",
        "ask_name": "✏️ Silakan masukkan *Nama* Anda:",
        "ask_department": "🏢 Silakan masukkan *Department/Fungsi* Anda:",
        "ask_agenda": "📋 Silakan masukkan *Agenda* meeting:",
        "confirmation": (
            "✅ *Booking Berhasil!*\n\n"
            "📅 Tanggal: *{date}*\n"
            "🏢 Ruangan: *{room}*\n"
            "⏰ Waktu: *{window}*\n"
            "⏱️ Durasi: *{hours} jam*\n"
            "👤 Nama: *{name}*\n"
            "🏢 Dept/Fungsi: *{department}*\n"
            "📋 Agenda: *{agenda}*\n\n"
            "Terima kasih! 🙏"
        ),
        "booking_failed": "❌ Maaf, terjadi kesalahan saat membuat booking. Ketik /start untuk mencoba lagi. Detail: {detail}",
        "session_expired": "Sesi berakhir. Silakan ketik /start untuk memulai lagi.",
        "processing_error": "❌ Terjadi kesalahan saat memproses permintaan Anda.",
        "cancelled": "Booking dibatalkan. Ketik /start untuk memulai lagi.",
        "help": (
            "🏢 *Booking Ruangan Meeting*\n\n"
            "/start - booking ruangan meeting\n"
            "/cancel - batalkan booking yang sedang berjalan\n"
            "/help - tampilkan pesan ini"
        ),
        "event_description": "Nama: {name}\nDepartment/Fungsi: {department}\nAgenda: {agenda}\nKontak: {contact}",
        "create_failed_detail": "Gagal membuat booking: {message}",
        "room_taken_detail": "{room} sudah tidak tersedia pada waktu ini",
    },
}


def text(language: str, key: str, **values: object) -> str:
    texts = _TEXTS.get(language, _TEXTS[DEFAULT_LANGUAGE])
    return texts[key].format(**values)


def date_short_label(day: date, language: str) -> str:
    """E.g. 'Sen, 20 Okt' / 'Mon, 20 Oct'."""
    weekdays = _WEEKDAYS.get(language, _WEEKDAYS[DEFAULT_LANGUAGE])
    months = _MONTHS.get(language, _MONTHS[DEFAULT_LANGUAGE])
    return f"{weekdays[day.weekday()][:3]}, {day.day} {months[day.month - 1][:3]}"


def date_long_label(day: date, language: str) -> str:
    """E.g. 'Senin, 20 Oktober 2026' / 'Monday, 20 October 2026'."""
    weekdays = _WEEKDAYS.get(language, _WEEKDAYS[DEFAULT_LANGUAGE])
    months = _MONTHS.get(language, _MONTHS[DEFAULT_LANGUAGE])
    return f"{weekdays[day.weekday()]}, {day.day} {months[day.month - 1]} {day.year}"


def sanitize_markdown(value: str) -> str:
    """Strip Markdown control characters from user text shown inside *bold* entities."""
    for char in ("_", "*", "`", "["):
        value = value.replace(char, "")
    return value
