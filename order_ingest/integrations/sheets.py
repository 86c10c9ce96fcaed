"""
Google Sheets record sink.

Auth: service account (email + private key) from Settings.
Each append re-opens the spreadsheet, so the adapter holds no state beyond
the settings it was constructed with.
"""
import logging
from typing import Any, Mapping

import gspread

from order_ingest.config import Settings
from order_ingest.integrations.sink import SinkConfigurationError, SinkError, SinkNotFoundError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def align_to_header(header: list[str], record: Mapping[str, Any]) -> list[Any]:
    """Order record values by the sheet's header row; unknown columns stay empty"""
    return [record.get(column, "") for column in header]


class SheetsSink:
    """Append-only sink backed by the worksheets of one Google Spreadsheet"""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _open_spreadsheet(self) -> gspread.Spreadsheet:
        if not self._settings.sheets_configured:
            raise SinkConfigurationError(
                "Missing env vars: SHEET_ID / GOOGLE_SERVICE_ACCOUNT_EMAIL / GOOGLE_PRIVATE_KEY"
            )
        client = gspread.service_account_from_dict(
            {
                "type": "service_account",
                "client_email": self._settings.google_service_account_email,
                "private_key": self._settings.google_private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=SCOPES,
        )
        return client.open_by_key(self._settings.sheet_id)

    def append(self, table_name: str, record: Mapping[str, Any]) -> None:
        spreadsheet = self._open_spreadsheet()
        try:
            worksheet = spreadsheet.worksheet(table_name)
        except gspread.exceptions.WorksheetNotFound:
            raise SinkNotFoundError(table_name) from None

        header = worksheet.row_values(1)
        if not header:
            raise SinkError(f"Sheet has no header row: {table_name}")

        dropped = set(record) - set(header)
        if dropped:
            logger.debug("Columns not in %s header, skipped: %s", table_name, sorted(dropped))

        worksheet.append_row(
            align_to_header(header, record),
            value_input_option="USER_ENTERED",
            insert_data_option="INSERT_ROWS",
        )
        logger.info("Appended row to %s", table_name)
