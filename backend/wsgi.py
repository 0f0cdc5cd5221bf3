from app import create_app

# Production entry point, e.g. `gunicorn --chdir backend wsgi:app`
try:
    app = create_app('production')
except Exception as production_error:
    print(f"Production config failed: {production_error}")
    app = create_app('development')
    print("Falling back to development configuration")
