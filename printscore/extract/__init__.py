from .image_loader import extract_asset, format_token_from_filename, is_raster_mime, make_edge_sample

__all__ = [
    'extract_asset',
    'format_token_from_filename',
    'is_raster_mime',
    'make_edge_sample',
]
