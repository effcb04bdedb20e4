# payday_ledger/outputs/csv_output.py

import csv
import logging
import os
from datetime import date
from payday_ledger.outputs.base import BaseOutput

logger = logging.getLogger(__name__)


class CSVOutput(BaseOutput):
    """
    Writes the given transactions to verlauf_<YYYY-MM-DD>.csv in the order
    they were recorded. Every cell is quoted.
    """
    def __init__(self, config):
        self.config     = config
        self.output_dir = config.get('output_dir', 'data')

    def write(self, transactions, day=None):
        if not transactions:
            logger.info("No transactions to export.")
            return None

        os.makedirs(self.output_dir, exist_ok=True)
        day = day or date.today()
        out_path = os.path.join(self.output_dir, f"verlauf_{day.isoformat()}.csv")

        with open(out_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL)
            writer.writerow(['category', 'description', 'amount', 'date'])
            for tx in transactions:
                writer.writerow([
                    tx.category,
                    tx.description,
                    f"{tx.amount:.2f}",
                    tx.timestamp.isoformat(),
                ])

        logger.info("Written %d transactions to %s", len(transactions), out_path)
        return out_path
