from user_microservice.service import UserPayload


def payload(email="alice@example.com", first="Alice", last="Smith", password="S3cret!pw") -> UserPayload:
    return UserPayload(email=email, first_name=first, last_name=last, password=password)
