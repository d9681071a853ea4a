"""Code128 barcodes for product SKUs (SVG for screens, PDF for label printers)."""

import io

from django.conf import settings

from reportlab.graphics import renderPDF, renderSVG
from reportlab.graphics.barcode import createBarcodeDrawing
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

LABEL_WIDTH = 70 * mm
LABEL_HEIGHT = 35 * mm


class BarcodeError(ValueError):
    pass


def barcode_drawing(value):
    if not value:
        raise BarcodeError("No value to encode")

    config = settings.INVENTORY_CONFIG
    return createBarcodeDrawing(
        'Code128',
        value=value,
        barHeight=config['BARCODE_BAR_HEIGHT_MM'] * mm,
        barWidth=config['BARCODE_BAR_WIDTH'],
        humanReadable=True,
    )


def barcode_svg(value):
    """SVG markup for the barcode of `value`."""
    drawing = barcode_drawing(value)
    return renderSVG.drawToString(drawing)


def product_label_pdf(product):
    """
    One-page label: product name on top, SKU barcode centred below it.
    The page grows if the barcode is wider than the default label.
    """
    drawing = barcode_drawing(product.sku)
    width = max(LABEL_WIDTH, drawing.width + 10 * mm)
    height = max(LABEL_HEIGHT, drawing.height + 16 * mm)

    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(width, height))
    pdf.setTitle(f"Label {product.sku}")

    pdf.setFont('Helvetica-Bold', 10)
    pdf.drawCentredString(width / 2, height - 8 * mm, product.name[:40])
    pdf.setFont('Helvetica', 7)
    pdf.drawCentredString(width / 2, height - 12 * mm, f"SKU {product.sku}")

    renderPDF.draw(drawing, pdf, (width - drawing.width) / 2, 3 * mm)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
