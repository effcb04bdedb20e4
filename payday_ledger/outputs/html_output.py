# payday_ledger/outputs/html_output.py

import logging
import os
from datetime import date
from html import escape
from payday_ledger.outputs.base import BaseOutput
from payday_ledger.reports import category_breakdown

logger = logging.getLogger(__name__)


class HTMLOutput(BaseOutput):
    """Static HTML report: one table grouped by category with subtotals and a grand total."""

    def __init__(self, config):
        self.config = config
        self.output_dir = config.get('output_dir', 'data')

    def write(self, transactions, day=None):
        if not transactions:
            logger.info("No transactions to export.")
            return None

        breakdown = category_breakdown(transactions)

        html_parts = [
            "<!doctype html><html><head><meta charset='UTF-8'><title>Verlauf</title>",
            "<style>body{font-family:sans-serif;}table{border-collapse:collapse;width:100%;}th,td{border:1px solid #ccc;padding:6px;}td.amount{text-align:right;}tr.subtotal{font-weight:700;background:#f4f4f4;}tr.total{font-weight:900;background:#e9f7ef;}</style>",
            "</head><body>",
            "<h2>Verlauf</h2>",
            "<table><tr><th>Category</th><th>Description</th><th>Amount</th></tr>",
        ]
        for group in breakdown['categories']:
            cat = escape(group['category'])
            for tx in group['transactions']:
                html_parts.append(
                    f"<tr><td>{cat}</td><td>{escape(tx.description)}</td><td class='amount'>{tx.amount:.2f}</td></tr>"
                )
            html_parts.append(
                f"<tr class='subtotal'><td colspan='2'>Total {cat}</td><td class='amount'>{group['total']:.2f}</td></tr>"
            )
        html_parts.append(
            f"<tr class='total'><td colspan='2'>Total</td><td class='amount'>{breakdown['total']:.2f}</td></tr>"
        )
        html_parts.append("</table></body></html>")

        os.makedirs(self.output_dir, exist_ok=True)
        day = day or date.today()
        out_path = os.path.join(self.output_dir, f"verlauf_{day.isoformat()}.html")
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write("\n".join(html_parts))

        logger.info("Written %d transactions to %s", len(transactions), out_path)
        return out_path
