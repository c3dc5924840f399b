import os
import sys
import django
import random
from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
from faker import Faker

# Add project root to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set up Django environment
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'freelance_marketplace.settings')
django.setup()

from core import services
from core.models import Project, SmartContractTerms

fake = Faker()

SKILLS = [
    "Solidity", "React", "TypeScript", "Python", "Django", "Rust",
    "UI/UX Design", "Smart Contract Auditing", "Node.js", "PostgreSQL",
]

CATEGORIES = ["Web Development", "Blockchain", "Design", "Data", "Mobile"]


def random_wallet():
    return '0x' + fake.hexify(text='^' * 40)


def money(low, high):
    return Decimal(random.uniform(low, high)).quantize(Decimal('0.01'))


def create_users(num_clients=10, num_freelancers=10):
    print(f"Creating {num_clients} clients and {num_freelancers} freelancers...")

    clients = []
    freelancers = []

    # Create Clients
    for _ in range(num_clients):
        email = fake.unique.email()
        user = services.create_user(
            username=email.split('@')[0],
            email=email,
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            wallet_address=random_wallet(),
            bio=fake.sentence(),
        )
        clients.append(user)

    # Create Freelancers
    for _ in range(num_freelancers):
        email = fake.unique.email()
        user = services.create_user(
            username=email.split('@')[0],
            email=email,
            first_name=fake.first_name(),
            last_name=fake.last_name(),
            wallet_address=random_wallet(),
            bio=fake.paragraph(),
            skills=random.sample(SKILLS, random.randint(2, 5)),
            hourly_rate=money(25, 150),
            rating=money(3.5, 5.0),
            total_reviews=random.randint(0, 80),
            is_freelancer=True,
        )
        freelancers.append(user)

    print(f"Created {len(clients)} clients and {len(freelancers)} freelancers.")
    return clients, freelancers


def create_projects(clients, freelancers):
    print("Creating projects...")
    projects = []

    for client in clients:
        # Each client posts 1-3 projects
        for _ in range(random.randint(1, 3)):
            status = random.choice([choice for choice, _ in Project.STATUS_CHOICES])
            freelancer = random.choice(freelancers) if status != 'open' else None

            project = services.create_project(
                client=client,
                freelancer=freelancer,
                title=fake.catch_phrase(),
                description=fake.paragraph(nb_sentences=4),
                total_budget=money(500, 20000),
                status=status,
                category=random.choice(CATEGORIES),
                tags=random.sample(SKILLS, random.randint(1, 3)),
                deadline=timezone.now() + timedelta(days=random.randint(7, 120)),
            )
            projects.append(project)

    print(f"Created {len(projects)} projects.")
    return projects


def create_modules(projects):
    print("Creating project modules...")
    modules = []

    for project in projects:
        for order in range(1, random.randint(2, 5) + 1):
            status = random.choice(['pending', 'in_progress', 'completed'])
            progress = random.randint(5, 95) if status == 'in_progress' else None

            fields = dict(
                name=fake.bs().title(),
                description=fake.sentence(),
                budget=money(100, 3000),
                status=status,
                priority=random.choice(['low', 'medium', 'high']),
                order=order,
            )
            if progress is not None:
                fields['progress'] = progress

            modules.append(services.create_project_module(project, **fields))

    print(f"Created {len(modules)} modules.")
    return modules


def create_contracts(projects):
    print("Creating smart contract terms...")
    contracts = []

    for project in projects:
        if project.status == 'open':
            continue

        contract = services.create_smart_contract(
            project,
            terms={
                'deliverables': fake.sentence(),
                'ownership': 'Client owns all delivered work',
            },
            payment_schedule=random.choice(
                [choice for choice, _ in SmartContractTerms.PAYMENT_SCHEDULE_CHOICES]
            ),
            cancellation_terms=fake.sentence(),
            quality_standards=fake.sentence(),
        )
        contracts.append(contract)

    print(f"Created {len(contracts)} contract terms.")
    return contracts


def create_proposals(projects, freelancers):
    print("Creating proposals...")
    proposals = []

    for project in projects:
        if project.status != 'open':
            continue

        for freelancer in random.sample(freelancers, min(3, len(freelancers))):
            proposal = services.create_proposal(
                project,
                freelancer=freelancer,
                cover_letter=fake.paragraph(nb_sentences=3),
                proposed_budget=money(float(project.total_budget) * 0.7, float(project.total_budget)),
                proposed_deadline=timezone.now() + timedelta(days=random.randint(14, 90)),
            )
            proposals.append(proposal)

    print(f"Created {len(proposals)} proposals.")
    return proposals


def create_messages(projects):
    print("Creating messages...")
    messages = []

    for project in projects:
        if project.freelancer is None:
            continue

        participants = [project.client, project.freelancer]
        for _ in range(random.randint(1, 6)):
            sender, receiver = random.sample(participants, 2)
            message = services.create_message(
                project=project,
                sender=sender,
                receiver=receiver,
                content=fake.sentence(),
            )
            if random.random() < 0.5:
                services.mark_message_read(message.id)
            messages.append(message)

    print(f"Created {len(messages)} messages.")
    return messages


def create_milestones(modules):
    print("Creating milestones...")
    milestones = []

    for module in modules:
        milestone = services.create_milestone(
            module.project,
            module=module,
            description=f"Delivery of {module.name}",
            amount=module.budget,
        )
        if module.status == 'completed':
            milestone = services.update_milestone(milestone.id, status='completed')
        milestones.append(milestone)

    print(f"Created {len(milestones)} milestones.")
    return milestones


def main():
    print("Starting database population...")

    clients, freelancers = create_users(num_clients=10, num_freelancers=15)

    projects = create_projects(clients, freelancers)

    modules = create_modules(projects)

    create_contracts(projects)

    create_proposals(projects, freelancers)

    create_messages(projects)

    create_milestones(modules)

    print("Database population completed successfully!")


if __name__ == '__main__':
    main()
