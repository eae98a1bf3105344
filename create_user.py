from app import create_app
from extensions import db
from models import ROLES, User
from modules.auth.accounts import hash_password, normalize_email


def create_user(app, username, email, password, role):
    with app.app_context():
        # email is the login key and must stay unique
        email = normalize_email(email)
        existing_user = User.query.filter_by(email=email).first()
        if existing_user:
            print(f"User '{email}' already exists with role '{existing_user.role}'.")
            return None

        user = User(
            username=username.strip(),
            email=email,
            password=hash_password(password),
            role=role
        )
        db.session.add(user)
        db.session.commit()
        print(f"Created user: {username} <{email}> (role: {role})")
        return user.id


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Create a new user.')
    parser.add_argument('username', help='Display name')
    parser.add_argument('email', help='Login email')
    parser.add_argument('password', help='Password')
    parser.add_argument('role', choices=list(ROLES), help='User role')

    args = parser.parse_args()
    create_user(create_app(), args.username, args.email, args.password, args.role)
