"""
PocketBase Python Client - Basic Usage Example

Reads POCKETBASE_BASE_URL, POCKETBASE_COLLECTION and POCKETBASE_API_TOKEN
from the environment (or a .env file) and walks through the main calls.

Run with: python examples/basic_usage.py
"""

import logging
import sys

from pocketbase_client import (
    ConfigurationError,
    PocketBaseClient,
    ValidationError,
    load_config_from_env,
)


def print_auth(success, payload):
    """Observer for the admin password grant."""
    if success:
        print(f"Generated Token: {payload['token']}")
    else:
        print(f"Error generating token: {payload}")


def main():
    logging.basicConfig(level=logging.INFO)

    try:
        config = load_config_from_env(collection="users", on_auth=print_auth)
    except ConfigurationError as e:
        sys.exit(e.message)

    with PocketBaseClient(config) as pb:
        pb.generate_token("admin@example.com", "password")

        print("Fetching all records:")
        result = pb.get_all_records()
        if result.ok:
            for record in result.response["items"]:
                print(record)
        else:
            print(f"Request failed ({result.status_code}): {result.response}")

        print("\nFetching filtered records (created after 2024-09-01):")
        result = pb.get_all_records({"filter": 'created >= "2024-09-01"'}, page=1, per_page=10)
        print(result.to_dict())

        print("\nCreating a user:")
        created = pb.accounts.create("jdoe", "jdoe@example.com", "SecurePassword123!", name="John")
        print(created.to_dict())

        if created.ok:
            user_id = created.response["id"]
            print(pb.accounts.update(user_id, {"description": "Updated"}).to_dict())
            print(pb.accounts.delete(user_id).to_dict())

        print("\nUser auth (token is not stored automatically):")
        auth = pb.auth.auth_with_password("jdoe@example.com", "SecurePassword123!")
        if auth.ok:
            pb.set_token(auth.response["token"])

        print("\nAuth methods:")
        print(pb.auth.list_auth_methods().to_dict())

        # The placeholder code is rejected by a real server
        print("\nDemo OAuth2 call shape:")
        print(pb.auth.auth_with_oauth2_flow({"provider": "google"}).to_dict())

        try:
            pb.accounts.delete("")
        except ValidationError as e:
            print(f"\nValidation error: {e.message}")


if __name__ == "__main__":
    main()
