"""Simple Flask web interface for wsdl-packager."""

import io
import os
import shutil

from flask import Flask, request, jsonify, send_file

from wsdl_packager.converter import Converter
from wsdl_packager.domain.exceptions import ConversionError
from wsdl_packager.domain.models import ConvertOptions, Credentials
from wsdl_packager.transform import list_templates

app = Flask(__name__)

# Configuration
app.config.from_mapping(
    TEMPLATE_DIR=os.environ.get('WSDL_PACKAGER_TEMPLATE_DIR'),
    BASE_PATH=os.environ.get('WSDL_PACKAGER_BASE_PATH', '.'),
    BASE_URL=os.environ.get('WSDL_PACKAGER_BASE_URL'),
)

# Request values kept out of the transform parameters
CREDENTIAL_FIELDS = ('username', 'password', 'domain')


def build_options(values) -> ConvertOptions:
    """Conversion options from the request; every non-credential value becomes a transform parameter."""
    return ConvertOptions(
        package_type=values.get('type', ''),
        template_dir=app.config['TEMPLATE_DIR'],
        base_path=app.config['BASE_PATH'],
        base_url=app.config['BASE_URL'] or request.host_url,
        credentials=Credentials(
            username=values.get('username'),
            password=values.get('password'),
            domain=values.get('domain'),
        ),
        parameters={key: values.get(key, '') for key in values.keys() if key not in CREDENTIAL_FIELDS},
        allow_local_files=False,
    )


@app.route('/api/templates')
def templates():
    """List the available package types."""
    return jsonify(list_templates(app.config['TEMPLATE_DIR']))


@app.route('/api/convert', methods=['GET', 'POST'])
def convert():
    """Convert the given WSDL locations and deliver the package as a ZIP file."""
    values = request.values
    if not values.get('wsdl'):
        return jsonify({'error': 'No WSDL location provided'}), 400
    if not values.get('type'):
        return jsonify({'error': 'No package type provided'}), 400

    converter = Converter(values['wsdl'], build_options(values))
    try:
        if not converter.definitions:
            return jsonify({'error': 'No WSDL document could be retrieved'}), 404
        archive = converter.create_archive(package_name=values.get('package') or None)
    except ConversionError as e:
        app.logger.warning('Conversion failed: %s', e)
        converter.cleanup()
        return jsonify({'error': str(e)}), 400

    # Read into memory so the temporary archive can be removed before responding
    with open(archive.path, 'rb') as f:
        data = io.BytesIO(f.read())
    shutil.rmtree(os.path.dirname(archive.path), ignore_errors=True)

    return send_file(
        data,
        mimetype='application/zip',
        as_attachment=True,
        download_name=f'{archive.package_name}.zip',
    )


if __name__ == '__main__':
    app.run(debug=True, port=5002)
