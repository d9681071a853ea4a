"""
CSV and PDF exports for products and stock intakes.

CSV goes through the standard csv module; PDF reports are ReportLab
platypus documents (title, timestamp, one table).
"""

import csv
import io

from django.conf import settings
from django.http import HttpResponse
from django.utils import timezone
from django.utils.html import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

PRODUCT_CSV_HEADERS = ['Name', 'SKU', 'Quantity', 'Weight (kg)', 'Location']
INTAKE_CSV_HEADERS = ['Received At', 'Product', 'SKU', 'Quantity', 'Total Weight (kg)',
                      'Unit Weight (kg)', 'Received By', 'Notes']


def _number(value):
    """Render a decimal without trailing zeros (12.500 -> 12.5, 25.000 -> 25)."""
    if value is None:
        return '0'
    normalized = value.normalize()
    return f"{normalized:f}"


def product_rows(products):
    for product in products:
        yield [
            product.name,
            product.sku or '',
            _number(product.quantity),
            _number(product.weight),
            product.location or '',
        ]


def intake_rows(intakes):
    for intake in intakes:
        product = intake.product
        yield [
            timezone.localtime(intake.received_at).strftime('%Y-%m-%d %H:%M'),
            product.name if product else '(deleted product)',
            product.sku if product else '',
            _number(intake.quantity),
            _number(intake.total_weight),
            _number(intake.single_weight),
            intake.received_by or '',
            intake.notes or '',
        ]


def csv_response(filename, headers, rows):
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'

    writer = csv.writer(response, quoting=csv.QUOTE_ALL)
    writer.writerow(headers)
    for row in rows:
        writer.writerow(row)
    return response


def build_pdf(title, headers, rows, *, wide=False):
    """Render a single-table report and return the PDF bytes."""
    buffer = io.BytesIO()
    pagesize = landscape(A4) if wide else A4
    doc = SimpleDocTemplate(
        buffer,
        pagesize=pagesize,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=title,
    )
    styles = getSampleStyleSheet()
    cell_style = styles['BodyText']
    cell_style.fontSize = 8
    cell_style.leading = 10

    story = [
        Paragraph(escape(title), styles['Title']),
        Paragraph(f"Generated {timezone.localtime():%Y-%m-%d %H:%M}", styles['Normal']),
        Spacer(1, 6 * mm),
    ]

    data = [headers]
    for row in rows:
        # Paragraphs let long names and notes wrap inside their cell
        data.append([Paragraph(escape(str(value)), cell_style) for value in row])

    if len(data) == 1:
        story.append(Paragraph("No records.", styles['Normal']))
    else:
        table = Table(data, repeatRows=1)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1f3b57')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 9),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#f2f5f8')]),
            ('GRID', (0, 0), (-1, -1), 0.25, colors.grey),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ]))
        story.append(table)

    doc.build(story)
    return buffer.getvalue()


def pdf_response(filename, pdf_bytes):
    response = HttpResponse(pdf_bytes, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def export_products_csv(products):
    return csv_response('products.csv', PRODUCT_CSV_HEADERS, product_rows(products))


def export_products_pdf(products):
    title = settings.INVENTORY_CONFIG['EXPORT_TITLE']
    headers = PRODUCT_CSV_HEADERS + ['Stock Qty', 'Stock Weight (kg)']
    rows = (
        base + [_number(product.stock_quantity), _number(product.stock_weight)]
        for base, product in zip(product_rows(products), products)
    )
    return pdf_response('products.pdf', build_pdf(title, headers, rows))


def export_intakes_csv(intakes):
    return csv_response('stock_intakes.csv', INTAKE_CSV_HEADERS, intake_rows(intakes))


def export_intakes_pdf(intakes):
    return pdf_response(
        'stock_intakes.pdf',
        build_pdf('Stock Intake History', INTAKE_CSV_HEADERS, intake_rows(intakes), wide=True),
    )
