# ==============================================================================
# WSGI Entry Point - Para Gunicorn en producción
# ==============================================================================
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# Variables de entorno relevantes: DOLCE_SECRET_KEY, DOLCE_DATA_DIR, API_KEY
# ==============================================================================

from dolce_pos.main import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
