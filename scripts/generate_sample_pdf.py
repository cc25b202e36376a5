#!/usr/bin/env python3
"""
Generate a synthetic two-page clinical site monitoring report PDF.

The report deliberately contains GCP gaps (an unsigned consent form, a
late SAE report, a missing delegation log entry) so the analyzer has
something to find.

Usage:
    uv run python scripts/generate_sample_pdf.py

Output:
    data/samples/site_visit_report.pdf
"""

from pathlib import Path

from fpdf import FPDF


class MonitoringReport(FPDF):
    """Custom PDF with headers and footers for a monitoring visit report."""

    def header(self):
        self.set_font("Helvetica", "B", 10)
        self.set_text_color(100, 100, 100)
        self.cell(0, 8, "Study ABC-301  - Interim Monitoring Visit Report", 0, 1, "C")
        self.line(10, self.get_y(), 200, self.get_y())
        self.ln(4)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(
            0, 10, f"Page {self.page_no()}/{{nb}} | Synthetic data for demo purposes",
            0, 0, "C",
        )

    def section_title(self, title: str):
        self.set_font("Helvetica", "B", 14)
        self.set_text_color(0, 0, 0)
        self.ln(6)
        self.cell(0, 10, title, 0, 1)
        self.line(10, self.get_y(), 200, self.get_y())
        self.ln(2)

    def body_text(self, text: str):
        self.set_font("Helvetica", "", 10)
        self.set_text_color(30, 30, 30)
        self.multi_cell(0, 5.5, text)
        self.ln(2)

    def table_row(self, cells: list[str], bold: bool = False):
        style = "B" if bold else ""
        self.set_font("Helvetica", style, 9)
        col_w = 190 / len(cells)
        for cell in cells:
            self.cell(col_w, 6, cell, 1, 0, "C")
        self.ln()


def generate_report():
    pdf = MonitoringReport()
    pdf.alias_nb_pages()
    pdf.set_auto_page_break(auto=True, margin=20)

    # =========================================================================
    # Page 1: Visit Summary & Informed Consent
    # =========================================================================
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 20)
    pdf.ln(10)
    pdf.cell(0, 12, "Interim Monitoring Visit Report", 0, 1, "C")
    pdf.set_font("Helvetica", "", 12)
    pdf.cell(0, 8, "Site 014  - Riverside Clinical Research Center", 0, 1, "C")
    pdf.cell(0, 8, "Visit date: 12 March 2026", 0, 1, "C")
    pdf.ln(8)

    pdf.section_title("Visit Summary")
    pdf.table_row(["Item", "Value"], bold=True)
    pdf.table_row(["Subjects screened", "18"])
    pdf.table_row(["Subjects randomised", "12"])
    pdf.table_row(["CRF pages verified", "214"])
    pdf.table_row(["Open queries", "37"])
    pdf.ln(4)

    pdf.section_title("Informed Consent")
    pdf.body_text(
        "Subject consent form missing signature. The consent form of subject "
        "014-007 is signed by the subject but the signature and date of the "
        "person obtaining consent are missing."
    )
    pdf.body_text(
        "Subjects 014-010 and 014-011 were consented on version 2.0 of the "
        "informed consent form. Version 3.0 was approved by the IRB on "
        "2 February 2026, before both consent dates."
    )

    # =========================================================================
    # Page 2: Staff, Safety, Investigational Product
    # =========================================================================
    pdf.add_page()
    pdf.section_title("Study Staff")
    pdf.body_text(
        "A new sub-investigator performed efficacy assessments for three "
        "subjects but is not listed on the delegation log. No protocol "
        "training record was found in the investigator site file."
    )

    pdf.section_title("Safety Reporting")
    pdf.body_text(
        "Subject 014-004 was hospitalised for pneumonia on 20 February 2026. "
        "The site became aware on 22 February; the SAE report was sent to the "
        "sponsor on 3 March 2026."
    )

    pdf.section_title("Investigational Product")
    pdf.body_text(
        "The pharmacy temperature log shows no entries for 6 to 9 March 2026 "
        "(weekend and public holiday). IP accountability logs reconcile with "
        "returned kits for all randomised subjects."
    )

    # =========================================================================
    # Save
    # =========================================================================
    output_dir = Path("data/samples")
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / "site_visit_report.pdf"
    pdf.output(str(output_path))
    print(f"Generated: {output_path} ({output_path.stat().st_size:,} bytes)")


if __name__ == "__main__":
    generate_report()
