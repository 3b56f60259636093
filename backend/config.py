import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _flag(name, default):
    return (os.environ.get(name) or default).lower() in ('1', 'true', 'yes')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(BASE_DIR, 'gamestate.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Line-oriented input lists, one entry per line
    MEMBERS_FILE = os.environ.get('MEMBERS_FILE') or os.path.join(BASE_DIR, 'members.txt')
    TERMS_FILE = os.environ.get('TERMS_FILE') or os.path.join(BASE_DIR, 'bingo_terms.txt')
    GROUPS_FILE = os.environ.get('GROUPS_FILE') or os.path.join(BASE_DIR, 'groups.txt')
    # Revealed lineup lives in its own file, apart from the snapshot table
    LINEUP_FILE = os.environ.get('LINEUP_FILE') or os.path.join(BASE_DIR, 'final_lineup.txt')
    # Create the snapshot table on startup instead of requiring `flask db upgrade`
    AUTO_CREATE_TABLES = _flag('AUTO_CREATE_TABLES', '1')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE') or '/'
