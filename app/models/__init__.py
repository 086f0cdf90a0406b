"""
Models package
MongoDB 컬렉션 데이터 모델은 app.models.mongodb 하위에 있다.
"""
