"""Transform engines turning definitions into package descriptors."""

from wsdl_packager.transform.base_transformer import Transformer
from wsdl_packager.transform.xslt_transformer import (
    DEFAULT_TEMPLATE_DIR,
    XsltTransformer,
    find_template,
    list_templates,
)

__all__ = [
    'Transformer',
    'XsltTransformer',
    'DEFAULT_TEMPLATE_DIR',
    'find_template',
    'list_templates',
]
