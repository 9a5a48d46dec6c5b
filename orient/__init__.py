import os
import click
from pathlib import Path
from flask import Flask, jsonify, request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from orient.errors import ApiError
from orient.extensions import db, migrate, cors
from orient.integrations.storage import build_storage_provider
from orient.integrations.storage.factory import storage_health
from orient.models import User
from orient.segments.segment_analytics import analytics_bp
from orient.segments.segment_auth import auth_bp
from orient.segments.segment_categories import categories_bp
from orient.segments.segment_crop_info import crop_info_bp
from orient.segments.segment_forum import forum_bp
from orient.segments.segment_listings import listings_bp
from orient.segments.segment_products import products_bp
from orient.segments.segment_uploads import uploads_bp
from orient.segments.segment_vendors import vendors_bp
from orient.services.content_repository import CropInfoRepository, ForumRepository
from orient.services.credential_hasher import CredentialHasher
from orient.services.forum_seed import seed_questions
from orient.services.listing_repository import ListingRepository
from orient.services.listing_service import ListingService
from orient.utils.observability import get_request_id, init_sentry, install_request_observers


def _resolve_alembic_head() -> str:
    try:
        from alembic.config import Config
        from alembic.script import ScriptDirectory

        migrations_dir = Path(__file__).resolve().parents[1] / "migrations"
        cfg = Config(str(migrations_dir / "alembic.ini"))
        cfg.set_main_option("script_location", str(migrations_dir))
        script = ScriptDirectory.from_config(cfg)
        heads = script.get_heads()
        return heads[0] if heads else "unknown"
    except Exception:
        return "unknown"


def _env_int(name: str, default: int, *, minimum: int = 1, maximum: int = 100000) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        value = int(default)
    else:
        try:
            value = int(raw)
        except ValueError:
            value = int(default)
    if value < minimum:
        value = minimum
    if value > maximum:
        value = maximum
    return value


def _error_response(payload: dict, status: int):
    rid = (get_request_id() or "").strip()
    if rid:
        payload["trace_id"] = rid
    return jsonify(payload), status


def create_app():
    app = Flask(__name__)
    init_sentry(app)

    env = (os.getenv("ORIENT_ENV", "dev") or "dev").strip().lower()

    # Production safety checks
    if env in ("prod", "production"):
        secret = (os.getenv("SECRET_KEY") or "").strip()
        if not secret or len(secret) < 16:
            raise RuntimeError("SECRET_KEY must be set and at least 16 chars in production")
        if not (os.getenv("DATABASE_URL") or "").strip() and not (os.getenv("SQLALCHEMY_DATABASE_URI") or "").strip():
            raise RuntimeError("DATABASE_URL (or SQLALCHEMY_DATABASE_URI) must be set in production")

    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-secret")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["UPLOAD_URL_TTL_SECONDS"] = _env_int("UPLOAD_URL_TTL_SECONDS", 900, minimum=60, maximum=86400)

    instance_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "instance"))
    os.makedirs(instance_dir, exist_ok=True)

    database_url = os.getenv("SQLALCHEMY_DATABASE_URI") or os.getenv("DATABASE_URL")
    if not database_url:
        database_url = "sqlite:///instance/orient.db"
    # Relative SQLite paths resolve to the single file under instance/.
    if database_url.startswith("sqlite:///") and database_url != "sqlite:///:memory:" and not os.path.isabs(database_url[len("sqlite:///"):]):
        canonical_path = os.path.join(instance_dir, "orient.db")
        database_url = f"sqlite:///{canonical_path.replace(os.sep, '/')}"
    if database_url.startswith("postgres://"):
        database_url = "postgresql://" + database_url[len("postgres://"):]
    app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    engine_options = {
        "pool_pre_ping": True,
        "pool_recycle": _env_int("DB_POOL_RECYCLE_SECONDS", 1800, minimum=60, maximum=86400),
    }
    if not database_url.startswith("sqlite://"):
        engine_options.update(
            {
                "pool_size": _env_int("DB_POOL_SIZE", 10, minimum=1, maximum=200),
                "max_overflow": _env_int("DB_MAX_OVERFLOW", 20, minimum=0, maximum=500),
                "pool_timeout": _env_int("DB_POOL_TIMEOUT_SECONDS", 30, minimum=1, maximum=300),
            }
        )
        app.logger.info(
            "db_pooling_enabled pool_size=%s max_overflow=%s pool_timeout=%s pool_recycle=%s",
            engine_options["pool_size"],
            engine_options["max_overflow"],
            engine_options["pool_timeout"],
            engine_options["pool_recycle"],
        )
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = engine_options

    cors_origins = (os.getenv("CORS_ORIGINS") or "").strip()
    if env in ("prod", "production"):
        origins = [o.strip() for o in cors_origins.split(",") if o.strip()]
    else:
        origins = ["*"] if not cors_origins else [o.strip() for o in cors_origins.split(",") if o.strip()]
    cors.init_app(app, resources={r"/api/*": {"origins": origins}})

    db.init_app(app)
    migrate.init_app(app, db)
    install_request_observers(app)

    listing_repository = ListingRepository()
    app.extensions["orient"] = {
        "listing_repository": listing_repository,
        "listing_service": ListingService(listing_repository, CredentialHasher.from_env()),
        "crop_info_repository": CropInfoRepository(),
        "forum_repository": ForumRepository(),
        "storage": build_storage_provider(),
    }

    @app.errorhandler(ApiError)
    def _api_error(error: ApiError):
        if error.status >= 500:
            app.logger.error("api_error path=%s code=%s message=%s", request.path, error.code, error.message)
        return _error_response(error.to_payload(), int(error.status))

    @app.errorhandler(HTTPException)
    def _api_http_exception(error: HTTPException):
        if not request.path.startswith("/api/"):
            return error
        payload = {
            "ok": False,
            "error": error.name,
            "message": error.description or error.name,
            "status": int(error.code or 500),
        }
        return _error_response(payload, int(error.code or 500))

    @app.errorhandler(Exception)
    def _api_unhandled_exception(error: Exception):
        app.logger.exception("unhandled_exception path=%s", request.path)
        payload = {
            "ok": False,
            "error": "InternalServerError",
            "message": "Internal server error",
            "status": 500,
        }
        return _error_response(payload, 500)

    app.register_blueprint(listings_bp)
    app.register_blueprint(crop_info_bp)
    app.register_blueprint(forum_bp)
    app.register_blueprint(uploads_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(vendors_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(analytics_bp)

    @app.get("/api/health")
    def health():
        db_state = "ok"
        db_error = None
        try:
            with db.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            db_state = "fail"
            msg = str(e)
            if msg:
                db_error = (msg[:300] + "...") if len(msg) > 300 else msg
        payload = {
            "ok": db_state == "ok",
            "service": "orient-backend",
            "env": env,
            "db": db_state,
            "storage": storage_health(),
            "alembic_head": _resolve_alembic_head(),
        }
        if db_error:
            payload["db_error"] = db_error
        return jsonify(payload), (200 if db_state == "ok" else 503)

    @app.get("/")
    def root():
        return jsonify({
            "ok": True,
            "service": "orient-backend",
            "env": env,
        })

    @app.before_request
    def _reset_db_session():
        db.session.rollback()

    @app.teardown_request
    def _cleanup_db_session(exc):
        try:
            if exc is not None:
                db.session.rollback()
        finally:
            db.session.remove()

    @app.cli.command("bootstrap-admin")
    def bootstrap_admin():
        allow = (os.getenv("ALLOW_ADMIN_BOOTSTRAP") or "").strip() == "1"
        if env not in ("dev", "development", "local", "test") and not allow:
            raise click.ClickException("Admin bootstrap disabled. Set ALLOW_ADMIN_BOOTSTRAP=1 or ORIENT_ENV=dev.")

        email = (os.getenv("ADMIN_EMAIL") or "").strip().lower()
        password = (os.getenv("ADMIN_PASSWORD") or "").strip()
        if not email or not password:
            raise click.ClickException("ADMIN_EMAIL and ADMIN_PASSWORD must be set.")

        u = User.query.filter_by(email=email).first()
        try:
            if u:
                u.set_password(password)
                u.role = "admin"
            else:
                u = User(email=email, first_name=email.split("@")[0], role="admin")
                u.set_password(password)
                db.session.add(u)
            db.session.commit()
            click.echo(f"admin_bootstrap_ok {u.email}")
        except SQLAlchemyError:
            db.session.rollback()
            raise click.ClickException("Failed to bootstrap admin.")

    @app.cli.command("seed-questions")
    def seed_questions_command():
        try:
            result = seed_questions(app.extensions["orient"]["forum_repository"])
        except SQLAlchemyError:
            db.session.rollback()
            raise click.ClickException("Failed to seed questions.")
        click.echo(
            f"seed_questions_ok questions={result['questions']} answers={result['answers']} skipped={result['skipped']}"
        )

    return app
