import os

# DB trong bộ nhớ; không tạo thư mục ./data khi import salon_app.db
os.environ.setdefault("DATABASE_URL", "sqlite://")
