import base64
import os

def generate_secret(num_bytes: int = 32) -> str:
    return base64.urlsafe_b64encode(os.urandom(num_bytes)).decode("utf-8").rstrip("=")

def setup_env():
    if os.path.exists(".env"):
        response = input("A .env file already exists. Overwrite it? (y/N): ")
        if response.lower() != 'y':
            print("Aborted.")
            return

    if not os.path.exists(".env.example"):
        print("Error: .env.example not found.")
        return

    print("Reading .env.example...")
    with open(".env.example", "r") as f:
        env_content = f.read()

    print("Generating token hash key and password pepper...")
    new_lines = []
    for line in env_content.splitlines():
        if line.startswith("TOKEN_HASH_KEY="):
            new_lines.append(f'TOKEN_HASH_KEY="{generate_secret()}"')
        elif line.startswith("PASSWORD_PEPPER="):
            new_lines.append(f'PASSWORD_PEPPER="{generate_secret()}"')
        else:
            new_lines.append(line)
            
    with open(".env", "w") as f:
        f.write("\n".join(new_lines))
        f.write("\n") # Ensure trailing newline

    print("SUCCESS: .env file created with new secrets.")

if __name__ == "__main__":
    setup_env()
