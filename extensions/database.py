# extensions/database.py
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()

# 整型主键上限（有符号 64 位），超出的 id 直接视为不存在
MAX_ROW_ID = 2 ** 63 - 1
