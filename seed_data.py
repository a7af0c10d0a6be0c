from sqlmodel import Session, select
from inkpress.db.session import engine, create_db_and_tables
from inkpress.models.blog import Blog, BlogCategory, BlogStatus
from inkpress.services.blog import BlogService
from inkpress.services.user import UserService

def seed_blogs():
    print("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        # Check if blogs already exist to avoid duplicates
        existing_blogs = session.exec(select(Blog)).all()
        if existing_blogs:
            print(f"Database already contains {len(existing_blogs)} blogs. Skipping seed.")
            return

        print("Seeding users...")
        users = UserService(session)
        admin = users.upsert({"sub": "admin-1", "email": "admin@inkpress.dev", "first_name": "Ada", "last_name": "Admin"})
        users.set_admin(admin.id, True)
        author = users.upsert({"sub": "author-1", "email": "writer@inkpress.dev", "first_name": "Wren", "last_name": "Writer"})

        print("Seeding blogs...")
        blogs = BlogService(session)
        posts = [
            dict(
                title="Getting Started with React Server Components",
                content="Server components let React render on the server and stream HTML to the browser...",
                category=BlogCategory.TECHNOLOGY,
                status=BlogStatus.APPROVED,
                views=120,
                ai=(88, "Clear, well structured walkthrough."),
            ),
            dict(
                title="A Week of Slow Travel in Portugal",
                content="Trains, tiled stations and long lunches: a slower way to see the Atlantic coast...",
                category=BlogCategory.TRAVEL,
                status=BlogStatus.APPROVED,
                views=45,
                ai=(82, "Vivid and personal travel writing."),
            ),
            dict(
                title="Budgeting for Freelancers",
                content="Irregular income needs a different kind of budget. Start with a baseline month...",
                category=BlogCategory.BUSINESS,
                status=BlogStatus.PENDING,
                views=0,
                ai=(64, "Useful but thin on examples."),
            ),
        ]

        for post in posts:
            blog = blogs.create(
                author_id=author.id,
                title=post["title"],
                content=post["content"],
                category=post["category"],
                status=BlogStatus.PENDING,
                excerpt=post["content"][:150] + "...",
            )
            score, analysis = post["ai"]
            blogs.set_ai_analysis(blog.id, "positive", score, analysis)
            if post["status"] != BlogStatus.PENDING:
                blogs.set_status(blog.id, post["status"])
            blog = blogs.get(blog.id)
            blog.views = post["views"]
            session.add(blog)
            session.commit()

        print(f"Successfully seeded {len(posts)} blogs!")

if __name__ == "__main__":
    seed_blogs()
