# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Timesheet Exporter.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Timesheet Exporter",

        # Form
        "form.title": "Weekly Timesheet",
        "form.resource": "Resource",
        "form.call_no": "Call No",
        "form.week_ending": "Week Ending",
        "form.include_project": "Include project name",
        "form.export": "Export",
        "form.exporting": "Exporting...",
        "form.help": "Help",
        "form.connection": "Connection...",

        # Form status line
        "status.not_connected": "Not connected to Clockify. Use Connection... first.",
        "status.connected": "Connected as {name}",
        "status.exported": "Timesheet saved to {path}",
        "status.failed": "Export failed: {error}",

        # Date picker
        "date.pick": "Pick a date",
        "date.title": "Select week ending",

        # Validation
        "validation.required": "Required",
        "validation.max_length": "Must be at most {max} characters",

        # Connection dialog
        "connection.title": "Clockify Connection",
        "connection.api_key": "API key:",
        "connection.api_key_hint": "Clockify > Profile settings > API",
        "connection.user": "User ID:",
        "connection.workspace": "Workspace ID:",
        "connection.connect": "Connect",
        "connection.disconnect": "Disconnect",
        "connection.success": "Connected as {name}.",
        "connection.failed": "Could not connect: {error}",

        # Help dialog
        "help.title": "How to export a timesheet",
        "help.body": (
            "1. Open Connection... and paste your Clockify API key.\n"
            "2. Enter your resource code (up to 3 characters) and call number (up to 8 characters).\n"
            "3. Pick the last day of the week you want to export.\n"
            "4. Tick \"Include project name\" to add a Project column.\n"
            "5. Click Export. The spreadsheet is saved to your export folder."
        ),

        # Spreadsheet
        "export.sheet_name": "Timesheet",
        "export.col_date": "Date",
        "export.col_day": "Day",
        "export.col_project": "Project",
        "export.col_description": "Description",
        "export.col_start": "Start",
        "export.col_end": "End",
        "export.col_hours": "Hours",
        "export.total": "Total",

        # General
        "error": "Error",
    },
    "de": {
        # Application
        "app.name": "Stundenzettel-Export",

        # Form
        "form.title": "Wochenstundenzettel",
        "form.resource": "Ressource",
        "form.call_no": "Auftragsnr.",
        "form.week_ending": "Wochenende",
        "form.include_project": "Projektname einfügen",
        "form.export": "Exportieren",
        "form.exporting": "Exportiere...",
        "form.help": "Hilfe",
        "form.connection": "Verbindung...",

        # Form status line
        "status.not_connected": "Nicht mit Clockify verbunden. Bitte zuerst Verbindung... öffnen.",
        "status.connected": "Verbunden als {name}",
        "status.exported": "Stundenzettel gespeichert unter {path}",
        "status.failed": "Export fehlgeschlagen: {error}",

        # Date picker
        "date.pick": "Datum wählen",
        "date.title": "Wochenende auswählen",

        # Validation
        "validation.required": "Pflichtfeld",
        "validation.max_length": "Höchstens {max} Zeichen",

        # Connection dialog
        "connection.title": "Clockify-Verbindung",
        "connection.api_key": "API-Schlüssel:",
        "connection.api_key_hint": "Clockify > Profileinstellungen > API",
        "connection.user": "Benutzer-ID:",
        "connection.workspace": "Workspace-ID:",
        "connection.connect": "Verbinden",
        "connection.disconnect": "Trennen",
        "connection.success": "Verbunden als {name}.",
        "connection.failed": "Verbindung fehlgeschlagen: {error}",

        # Help dialog
        "help.title": "Stundenzettel exportieren",
        "help.body": (
            "1. Verbindung... öffnen und den Clockify-API-Schlüssel einfügen.\n"
            "2. Ressourcencode (bis 3 Zeichen) und Auftragsnummer (bis 8 Zeichen) eingeben.\n"
            "3. Den letzten Tag der gewünschten Woche wählen.\n"
            "4. \"Projektname einfügen\" ankreuzen, um eine Projektspalte zu erhalten.\n"
            "5. Auf Exportieren klicken. Die Tabelle wird im Exportordner gespeichert."
        ),

        # Spreadsheet
        "export.sheet_name": "Stundenzettel",
        "export.col_date": "Datum",
        "export.col_day": "Tag",
        "export.col_project": "Projekt",
        "export.col_description": "Beschreibung",
        "export.col_start": "Beginn",
        "export.col_end": "Ende",
        "export.col_hours": "Stunden",
        "export.total": "Summe",

        # General
        "error": "Fehler",
    },
}
