"""
QR code rendering of provisioning URIs
"""
import base64
import io

import qrcode


def generate_qr_code(provisioning_uri, box_size=10, border=4):
    """
    Render the provisioning URI as a QR code
    Returns raw PNG bytes, sized to fit the URI
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(provisioning_uri)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffered = io.BytesIO()
    img.save(buffered, format="PNG")
    return buffered.getvalue()


def qr_data_uri(provisioning_uri, box_size=10, border=4):
    """Embed the QR code PNG as a data URI for an <img> tag"""
    png = generate_qr_code(provisioning_uri, box_size=box_size, border=border)
    return f"data:image/png;base64,{base64.b64encode(png).decode()}"
