"""Record store object names and policy status constants.

Object names are the Financial Services Cloud standard objects the design
tool writes to or reads from.
"""

INSURANCE_POLICY_OBJECT = "InsurancePolicy"
INSURANCE_POLICY_COVERAGE_OBJECT = "InsurancePolicyCoverage"
INSURANCE_POLICY_PARTICIPANT_OBJECT = "InsurancePolicyParticipant"
PRODUCT_OBJECT = "Product2"
PRICEBOOK_ENTRY_OBJECT = "PricebookEntry"
PRICEBOOK_OBJECT = "Pricebook2"
ACCOUNT_OBJECT = "Account"
CONTACT_OBJECT = "Contact"

# Objects a design operation creates, in creation order
DESIGN_OBJECTS = (
    INSURANCE_POLICY_OBJECT,
    INSURANCE_POLICY_COVERAGE_OBJECT,
    INSURANCE_POLICY_PARTICIPANT_OBJECT,
    PRODUCT_OBJECT,
    PRICEBOOK_ENTRY_OBJECT,
)

DATA_MODEL_LABEL = "Salesforce Financial Services Cloud - Standard Objects"

STATUS_IN_FORCE = "In Force"
STATUS_PENDING = "Pending"
STATUS_SUSPENDED = "Suspended"

# Statuses returned by the policy listing
LISTED_POLICY_STATUSES = (
    STATUS_IN_FORCE,
    STATUS_PENDING,
    STATUS_SUSPENDED,
)
