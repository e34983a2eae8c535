"""UI strings for the public site and the admin dashboard."""

from __future__ import annotations

# (code, label, flag) in the order shown by the language switcher.
LANGUAGES = (
    ("en", "English", "🇺🇸"),
    ("fr", "Français", "🇫🇷"),
)

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "blog": "Blog",
        "heroSubtitle": "Insights and analysis on the future of microfinance and technology.",
        "searchPlaceholder": "Search articles, authors, topics...",
        "noResults": "No results found",
        "backToPosts": "Back to all posts",
        "share": "SHARE",
        "readTime": "read",
        "adminPortal": "Admin Portal",
        "adminSubtitle": "Secure access for editors",
        "username": "Username",
        "password": "Password",
        "signIn": "Sign In",
        "backToPublic": "Return to public site",
        "credentials": "Demo",
        "dashboard": "Dashboard",
        "newPost": "New Post",
        "logout": "Log out",
        "recentPosts": "Recent Posts",
        "status": "Status",
        "published": "Published",
        "draft": "Draft",
        "aiAssistant": "AI Writer",
        "aiAssistantDesc": "Enter a topic to generate a professional draft.",
        "topicLabel": "Blog Topic",
        "topicPlaceholder": "e.g., The impact of AI on digital banking",
        "generating": "Generating...",
        "magicGen": "Generate Draft",
        "poweredBy": "Powered by Gemini AI",
        "translating": "Translating...",
        "translateAction": "Translate",
        "publishAction": "Publish",
        "unpublishAction": "Unpublish",
        "suggestedPosts": "Suggested for you",
        "continueReading": "Continue Reading",
        "sortBy": "Sort by",
        "newest": "Newest First",
        "oldest": "Oldest First",
        "prev": "Previous",
        "next": "Next",
        "liveUpdates": "Live updates active",
        "linkCopied": "Link copied!",
        "invalidCredentials": "Invalid credentials.",
        "generationFailed": "AI generation failed. Please check your API key.",
        "translationFailed": "Translation failed. AI might be temporarily unavailable.",
    },
    "fr": {
        "blog": "Le Blog",
        "heroSubtitle": "Perspectives et analyses sur l'avenir de la microfinance et de la technologie.",
        "searchPlaceholder": "Rechercher des articles, auteurs, catégories...",
        "noResults": "Aucun résultat trouvé",
        "backToPosts": "Retour à tous les articles",
        "share": "PARTAGER",
        "readTime": "lecture",
        "adminPortal": "Portail Admin",
        "adminSubtitle": "Accès sécurisé pour les éditeurs",
        "username": "Identifiant",
        "password": "Mot de passe",
        "signIn": "Se connecter",
        "backToPublic": "Retour au site public",
        "credentials": "Démo",
        "dashboard": "Tableau de bord",
        "newPost": "Nouvel Article",
        "logout": "Déconnexion",
        "recentPosts": "Articles Récents",
        "status": "Statut",
        "published": "Publié",
        "draft": "Brouillon",
        "aiAssistant": "Assistant IA",
        "aiAssistantDesc": "Saisissez un sujet pour générer un brouillon professionnel.",
        "topicLabel": "Sujet du blog",
        "topicPlaceholder": "ex: L'impact de l'IA sur la banque numérique",
        "generating": "Génération...",
        "magicGen": "Générer Brouillon",
        "poweredBy": "Propulsé par Gemini AI",
        "translating": "Traduction...",
        "translateAction": "Traduire",
        "publishAction": "Publier",
        "unpublishAction": "Dépublier",
        "suggestedPosts": "Articles suggérés",
        "continueReading": "Continuer la lecture",
        "sortBy": "Trier par",
        "newest": "Plus récent",
        "oldest": "Plus ancien",
        "prev": "Précédent",
        "next": "Suivant",
        "liveUpdates": "Mis à jour en direct",
        "linkCopied": "Lien copié !",
        "invalidCredentials": "Identifiants invalides.",
        "generationFailed": "La génération IA a échoué. Vérifiez votre clé API.",
        "translationFailed": "La traduction a échoué. L'IA est peut-être temporairement indisponible.",
    },
}
